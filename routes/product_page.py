# routes/product_page.py
import logging
from pathlib import Path
from typing import Callable

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from config import settings
from products_api import ProductsApiClient
from services.page_sessions import PageSession, PageSessionStore
from services.product_state import FORM_FIELDS, ViewKind

logger = logging.getLogger("product_pages")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

ROOT_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(ROOT_DIR / "templates"))

SESSION_COOKIE = "product_page_session"

router = APIRouter(
    prefix="/products",
    tags=["Product Pages"],
    include_in_schema=False,
)

# ---------- dependencies ----------

def get_products_api() -> ProductsApiClient:
    return ProductsApiClient(endpoint=settings.products_api_url, timeout=settings.products_api_timeout)

def get_api_factory() -> Callable[[], ProductsApiClient]:
    return get_products_api

_PAGE_STORE = PageSessionStore(idle_seconds=settings.page_session_idle_seconds)

def get_page_store() -> PageSessionStore:
    return _PAGE_STORE

def page_session(
    request: Request,
    store: PageSessionStore = Depends(get_page_store),
    make_api: Callable[[], ProductsApiClient] = Depends(get_api_factory),
) -> PageSession:
    session, created = store.open(request.cookies.get(SESSION_COOKIE), make_api)
    if created:
        logger.info("Opened page session %s", session.id)
    return session

# ---------- helpers ----------

def _remember(response, session: PageSession):
    response.set_cookie(key=SESSION_COOKIE, value=session.id, httponly=True, samesite="lax")
    return response

def _back_to(url: str, session: PageSession) -> RedirectResponse:
    return _remember(RedirectResponse(url=url, status_code=303), session)

def _back_to_list(session: PageSession) -> RedirectResponse:
    # The redirected GET shows this action's outcome instead of reloading over it.
    session.products.hold()
    return _back_to("/products", session)

# ---------- list page ----------

@router.get("", response_class=HTMLResponse)
def products_page(request: Request, session: PageSession = Depends(page_session)):
    page = session.products
    page.mount()
    context = {
        "title": "Product Management",
        "state": page.state,
        "view": page.view.value,
        "views": ViewKind,
    }
    return _remember(templates.TemplateResponse(request, "products.html", context), session)

@router.post("/reload")
def reload_products(session: PageSession = Depends(page_session)):
    session.products.reload()
    return _back_to_list(session)

@router.post("/submit")
def submit_product(
    session: PageSession = Depends(page_session),
    name: str = Form(""),
    price: str = Form(""),
    quantity: str = Form(""),
):
    page = session.products
    for field, value in zip(FORM_FIELDS, (name, price, quantity)):
        page.on_change(field, value)
    page.on_submit()
    return _back_to_list(session)

@router.post("/cancel-edit")
def cancel_edit(session: PageSession = Depends(page_session)):
    session.products.cancel_edit()
    return _back_to_list(session)

@router.post("/dismiss-notice")
def dismiss_notice(session: PageSession = Depends(page_session)):
    session.products.dismiss_notice()
    return _back_to_list(session)

@router.post("/{product_id:path}/edit")
def edit_product(product_id: str, session: PageSession = Depends(page_session)):
    if not session.products.begin_edit_by_id(product_id):
        logger.info("Edit requested for unlisted product %s", product_id)
    return _back_to_list(session)

@router.post("/{product_id:path}/delete")
def delete_product(product_id: str, session: PageSession = Depends(page_session)):
    session.products.remove(product_id)
    return _back_to_list(session)

# ---------- create page ----------

@router.get("/new", response_class=HTMLResponse)
def create_product_page(request: Request, session: PageSession = Depends(page_session)):
    context = {"title": "Create a New Product", "state": session.creator.state}
    return _remember(templates.TemplateResponse(request, "create_product.html", context), session)

@router.post("/new")
def create_product(
    session: PageSession = Depends(page_session),
    name: str = Form(""),
    price: str = Form(""),
    quantity: str = Form(""),
):
    page = session.creator
    for field, value in zip(FORM_FIELDS, (name, price, quantity)):
        page.on_change(field, value)
    page.on_submit()
    return _back_to("/products/new", session)
