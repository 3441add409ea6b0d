import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talentsearch.config import settings
from talentsearch.database import SessionLocal, has_full_text, init_db
from talentsearch.dependencies import get_retrieval_service
from talentsearch.routers import applicants, companies, jobs, search
from talentsearch.services.document_store import DocumentStore
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.services.retrieval_service import RetrievalService
from talentsearch.services.search_backends import BackendSelector

logger = logging.getLogger("talentsearch")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: schema first, then the search engine. The backend chosen here
    # stays active until the process restarts.
    init_db()
    store = DocumentStore(SessionLocal, full_text=has_full_text())
    index_manager = SearchIndexManager.from_settings(settings)
    index_manager.connect()
    selector = BackendSelector(index_manager, store)
    logger.info("Search mode: %s", selector.mode.value)

    app.state.document_store = store
    app.state.index_manager = index_manager
    app.state.retrieval_service = RetrievalService(selector)
    yield
    index_manager.close()


app = FastAPI(
    title="Talent Search",
    description="Job and candidate search with recommendations",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applicants.router, prefix=settings.api_prefix)
app.include_router(companies.router, prefix=settings.api_prefix)
app.include_router(search.router, prefix=settings.api_prefix)


@app.get("/health")
async def health(retrieval: RetrievalService = Depends(get_retrieval_service)):
    return {"status": "ok", "version": VERSION, "searchMode": retrieval.mode.value}
