"""Builds the filtered orders.csv request for the Ordering API."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal, Union
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter

from orders_export.core.settings import Settings
from orders_export.ordering.models import DateWindow, ExportRequest


logger = logging.getLogger(__name__)

DELIVERY_ATTRIBUTE = "delivery_datetime"
STATUS_ATTRIBUTE = "status"
COMPLETED_STATUS = 11

API_DATETIME_FORMAT = "%m/%d/%Y %H:%M:%S"

# Characters encodeURIComponent leaves alone on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!~*'()"


class DateCondition(BaseModel):
    condition: Literal[">=", "<="]
    value: str


class FilterClause(BaseModel):
    attribute: str
    value: Union[DateCondition, list[int]]


_FILTER_ADAPTER = TypeAdapter(list[FilterClause])


def format_api_datetime(value: datetime) -> str:
    """Formats as MM/DD/YYYY HH:MM:SS (24h, zero-padded, sub-seconds dropped)."""
    return value.strftime(API_DATETIME_FORMAT)


def build_filter(window: DateWindow) -> list[FilterClause]:
    return [
        FilterClause(
            attribute=DELIVERY_ATTRIBUTE,
            value=DateCondition(condition=">=", value=format_api_datetime(window.start)),
        ),
        FilterClause(
            attribute=DELIVERY_ATTRIBUTE,
            value=DateCondition(condition="<=", value=format_api_datetime(window.end)),
        ),
        FilterClause(attribute=STATUS_ATTRIBUTE, value=[COMPLETED_STATUS]),
    ]


def serialize_filter(clauses: list[FilterClause]) -> str:
    """Compact JSON array, key order as declared on the models."""
    return _FILTER_ADAPTER.dump_json(clauses).decode("utf-8")


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_export_path(
    window: DateWindow,
    business_slug: str,
    api_version: str = "v400",
    locale: str = "en",
) -> str:
    where = encode_uri_component(serialize_filter(build_filter(window)))
    slug = encode_uri_component(business_slug)
    return f"/{api_version}/{locale}/{slug}/orders.csv?mode=dashboard&where={where}&orderBy=id"


def build_export_request(window: DateWindow, settings: Settings) -> ExportRequest:
    path = build_export_path(
        window,
        business_slug=settings.business_slug,
        api_version=settings.api_version,
        locale=settings.locale,
    )
    logger.debug("Export path built | host=%s | path=%s", settings.api_host, path)
    return ExportRequest(
        host=settings.api_host,
        path=path,
        headers={
            "X-API-KEY": settings.api_key,
            "Accept": "text/csv",
        },
    )
