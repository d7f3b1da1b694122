"""FastAPI dependencies handing request handlers their services.

The store handle lives on ``app.state``; each request builds its services
around it, so nothing but the store is shared between requests.
"""

from fastapi import Depends, Request

from src.clients import MongoDBClient
from src.config import AppConfig
from src.services import (
    ManufacturerService,
    ProductCreationService,
    ProductService,
    ReportingService,
)


def get_store(request: Request) -> MongoDBClient:
    return request.app.state.store


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_product_service(
    store: MongoDBClient = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
) -> ProductService:
    return ProductService(store, default_limit=config.api.default_limit)


def get_product_creation_service(
    store: MongoDBClient = Depends(get_store),
) -> ProductCreationService:
    return ProductCreationService(store)


def get_reporting_service(
    store: MongoDBClient = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
) -> ReportingService:
    return ReportingService(
        store,
        low_stock_threshold=config.reporting.low_stock_threshold,
        critical_stock_threshold=config.reporting.critical_stock_threshold,
    )


def get_manufacturer_service(
    store: MongoDBClient = Depends(get_store),
) -> ManufacturerService:
    return ManufacturerService(store)
