from __future__ import annotations

import logging
from typing import Optional

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.services.request_dispatcher import RequestDispatcher
from ..infra.http_client import HttpClient
from ..infra.json_serializer import JsonSerializer
from ..infra.permit_pool import PermitPool

logger = logging.getLogger(__name__)


def worker_count(max_workers: Optional[int], limit: int) -> int:
	return max_workers or limit


def permit_pool_resource(period_seconds, limit):
	"""Permit pool whose refill timer lives as long as the container's resources."""
	logger.info(f"Initializing permit pool: {limit} permit(s) every {period_seconds}s")
	with PermitPool(period=period_seconds, limit=limit) as pool:
		yield pool
	logger.debug("Permit pool closed")


def http_client_resource(timeout_seconds, max_connections):
	logger.info("Initializing HTTP client")
	client = HttpClient(timeout_seconds=timeout_seconds, max_connections=max_connections)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	workers = providers.Callable(worker_count, max_workers=config.max_workers, limit=config.limit)

	permit_pool = providers.Resource(
		permit_pool_resource,
		period_seconds=config.period_seconds,
		limit=config.limit,
	)

	http_client = providers.Resource(
		http_client_resource,
		timeout_seconds=config.timeout_seconds,
		max_connections=workers,
	)

	serializer = providers.Factory(JsonSerializer)

	dispatcher = providers.Factory(
		RequestDispatcher,
		permit_pool=permit_pool,
		serializer=serializer,
		transport=http_client,
		endpoint_url=config.endpoint_url,
		max_workers=workers,
	)
