from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from mpt_demo.constants import GREETING

app = FastAPI(title="XRPL MPT Demo")


class HealthResp(BaseModel):
    status: str


@app.get("/", response_class=PlainTextResponse)
def hello():
    return GREETING


@app.get("/health", response_model=HealthResp)
def health():
    return HealthResp(status="ok") # Not the most thorough of healthchecks...
