# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging
from typing import Any, Callable, Coroutine, Mapping

from fastapi import APIRouter
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request

from edgytable.config import Settings, TableSettings, get_settings
from edgytable.exceptions import FilterValidationError
from edgytable.params import RequestParameters
from edgytable.resource import Resource
from edgytable.schemas import TableResponse


logger = logging.getLogger("edgytable.api")


def get_request_parameters(request: Request) -> RequestParameters:
    """FastAPI dependency: ``params: RequestParameters = Depends(get_request_parameters)``"""
    return RequestParameters.from_request(request, page_name=get_settings().page_name)


async def table_response_action(
    resource_cls: type[Resource],
    params: RequestParameters,
    parameters: Mapping[str, Any] | None = None,
    settings: TableSettings | None = None,
) -> TableResponse:
    """
    Build the table response of a resource for the given request parameters.

    Raises:
        RequestValidationError: When filter values fail the declared rules
    """
    try:
        resource = resource_cls(params, parameters=parameters, settings=settings)

        return await resource.to_response()
    except FilterValidationError as e:
        logger.debug(f"Rejected filters for {resource_cls.__name__}: {e.errors}")
        raise RequestValidationError(e.to_error_details())


def generate_table_endpoint(
    resource_cls: type[Resource],
) -> Callable[[Request, TableSettings], Coroutine[Any, Any, TableResponse]]:
    async def table_endpoint(request: Request, settings: Settings) -> TableResponse:
        params = RequestParameters.from_request(
            request,
            page_name=resource_cls.page_name or settings.page_name,
        )

        return await table_response_action(
            resource_cls,
            params,
            parameters=dict(request.path_params),
            settings=settings,
        )

    return table_endpoint


def register_table_route(
    router: APIRouter,
    resource_cls: type[Resource],
    path: str = "",
    **options: Any,
) -> None:
    """
    Register the GET route serving the table of a resource.

    Path parameters of the route are passed to the resource as parameters.

    Args:
        router: The FastAPI router to register the route in
        resource_cls: The resource class serving the table
        path: The route path
        options: Extra arguments of ``APIRouter.add_api_route``
    """
    name = resource_cls.__name__

    logger.debug(f"Adding table route for {name} on '{path}'")

    router.add_api_route(**{
        "path": path,
        "endpoint": generate_table_endpoint(resource_cls),
        "methods": ["GET"],
        "summary": f"{name} table",
        "description": f"Retrieve a page of {name} records with the table controls",
        "response_model": None,
        **options,
    })


__all__ = [
    "get_request_parameters",
    "table_response_action",
    "generate_table_endpoint",
    "register_table_route",
]
