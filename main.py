from fastapi import FastAPI

from shared.config import settings
from shared.config.database import init_models
from shared.observability import setup_observability

# IMPORTANT: import models so they register with Base
from services.catalog_service import models as catalog_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.catalog_service.main import catalog_app
from services.order_service.main import order_app

app = FastAPI(title="Art Gallery Store")

setup_observability(app, settings.SERVICE_NAME)


@app.on_event("startup")
async def startup_event():
    # Mounted sub-apps do not run their own startup hooks
    await init_models()


# Order routes first: /api would otherwise swallow /api/orders
app.mount("/api/orders", order_app)
app.mount("/api", catalog_app)
