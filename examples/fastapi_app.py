import os

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from apmagent import Agent
from apmagent.instrumentation.fastapi import instrument_app
from apmagent.logger import setup_logging

# Normally supplied by the deployment environment
os.environ.setdefault("APMAGENT_LICENSE_KEY", "0123456789ABC")
os.environ.setdefault("APMAGENT_APPLICATION_ID", "42")
os.environ.setdefault("APMAGENT_BROWSER_KEY", "abc123")

setup_logging("DEBUG")

app = FastAPI()
agent = Agent()
api = instrument_app(app, agent)

# 1. Keep long-polling out of response times
api.add_ignoring_rule(r"^/socket\.io/")

# 2. Group item pages under one name
api.add_naming_rule(r"^/item/([0-9a-f]+)$", "Item")


@app.get("/", response_class=HTMLResponse)
async def index():
    api.set_controller_name("Home", "index")
    return f"<html><head>{api.get_browser_timing_header()}</head><body>hi</body></html>"


@app.get("/item/{item_id}")
async def item(item_id: str):
    if item_id == "0":
        api.notice_error(ValueError("item 0 does not exist"))
    return {"item": item_id}


@app.get("/recorded")
async def recorded():
    return {"transactions": agent.transactions, "errors": len(agent.errors.errors)}


# Run with: uvicorn examples.fastapi_app:app
