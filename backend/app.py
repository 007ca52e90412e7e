import json
import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from composer import generate_email_response
from validation import InvalidInput, parse_reply_request

load_dotenv()

LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    force=True,
)
logger = logging.getLogger("reply_drafter")

GENERIC_FAILURE = "An error occurred while generating the reply. Please try again."

app = FastAPI()

origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("Backend initialized (log_level=%s, cors_origins=%s)", LOG_LEVEL_NAME, origins)


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/api/generate")
async def generate(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Rejected generate request: body is not valid JSON")
        raise HTTPException(status_code=400, detail="Invalid request: missing data.")

    try:
        reply_request = parse_reply_request(payload)
    except InvalidInput as exc:
        logger.warning("Rejected generate request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        response = generate_email_response(reply_request)
    except Exception as exc:
        logger.exception("Failed to generate reply")
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE) from exc

    logger.info(
        "Generated reply (context=%s sentiment=%s urgency=%s)",
        reply_request.context,
        response.analysis.sentiment,
        response.analysis.urgency,
    )
    return response.model_dump(by_alias=True)
