# main.py
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.responses import RedirectResponse
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent
sys.path.append(str(ROOT_DIR))

load_dotenv()

from config import settings
from database import engine, Base
import models
from routes import product_page, products


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.serve_mock_api:
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Product Management", lifespan=lifespan)

app.mount("/static", StaticFiles(directory=str(ROOT_DIR / "static")), name="static")

@app.get("/", response_class=RedirectResponse, include_in_schema=False)
async def read_root():
    return RedirectResponse(url="/products")

# Routers
app.include_router(product_page.router)
if settings.serve_mock_api:
    app.include_router(products.router)
