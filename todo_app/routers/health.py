"""Health check router."""

from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from todo_app.core.dependencies import get_store
from todo_app.repositories.base import TodoStore
from todo_app.utils.time import utc_now_iso

router = APIRouter()


def _load_alembic_head() -> Optional[str]:
    project_root = Path(__file__).resolve().parents[2]
    cfg_path = project_root / "alembic.ini"
    script_location = project_root / "alembic"
    if not cfg_path.exists() or not script_location.exists():
        return None

    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(script_location))
    script = ScriptDirectory.from_config(config)
    return script.get_current_head()


@router.get("/health")
async def health_check(request: Request, store: TodoStore = Depends(get_store)):
    """Liveness plus storage connection state; 500 when the store is unreachable."""

    db_ok = await store.ping()

    database = {"backend": store.backend, "state": store.state, "ok": db_ok}
    if store.backend == "sql":
        database["alembic_current"] = await store.schema_revision() if db_ok else None
        try:
            database["alembic_head"] = _load_alembic_head()
        except Exception:
            database["alembic_head"] = None
        database["alembic_head_ok"] = bool(
            database["alembic_current"] and database["alembic_current"] == database["alembic_head"]
        )

    settings = request.app.state.settings
    return JSONResponse(
        status_code=200 if db_ok else 500,
        content={
            "status": "ok" if db_ok else "error",
            "database": database,
            "environment": {"name": settings.ENVIRONMENT, "app": settings.APP_NAME},
            "timestamp": utc_now_iso(),
        },
    )
