"""
Route table → FastAPI router.

Every endpoint is described by a ``Route`` (method, path, action, input
schema). ``build_router`` turns the table into an ``APIRouter`` whose
endpoints all share one request pipeline:

  1. Collect the action's parameters by name from the path parameters,
     then the query string, then the JSON body (first hit wins).
     A parameter named ``session`` receives the request session.
  2. Validate them with the route's pydantic schema → 400 on failure.
  3. Run the action on a ``Concepts`` bundle bound to a fresh database
     session; commit on success, roll back on error.
  4. Render ``BaseResponse`` as JSON, or run the error through the
     response error registry and answer with its status code.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from opentelemetry import trace
from pydantic import BaseModel, ValidationError

from concept_social.concepts import Concepts
from concept_social.database import session_scope
from concept_social.errors import ConceptError
from concept_social.responses import Responses, handle_error
from concept_social.telemetry import ACTION_LATENCY, ACTION_TOTAL, ERRORS_TOTAL

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

SESSION_PARAM = "session"
VALIDATION_FAILED = {"msg": "Bad Request: validation failed"}
INTERNAL_ERROR = "Internal Server Error"


@dataclass
class BaseResponse:
    status_code: int = 200
    msg: Optional[str] = None
    body: Any = None
    location: Optional[str] = None


Action = Callable[..., Awaitable[BaseResponse]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    action: Action
    schema: Optional[type[BaseModel]] = None

    @property
    def name(self) -> str:
        return self.action.__name__


def _param_names(action: Action) -> list[str]:
    # The first parameter is always the Concepts bundle
    return list(inspect.signature(action).parameters)[1:]


async def _read_body(request: Request) -> dict:
    if not await request.body():
        return {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


async def _gather_args(request: Request, names: list[str]) -> dict[str, Any]:
    body = await _read_body(request)
    args: dict[str, Any] = {}
    for name in names:
        if name == SESSION_PARAM:
            continue
        for source in (request.path_params, request.query_params, body):
            if source.get(name) is not None:
                args[name] = source[name]
                break
    return args


def _validate(schema: type[BaseModel], args: dict[str, Any]) -> dict[str, Any]:
    model = schema.model_validate(args)
    return {name: getattr(model, name) for name in type(model).model_fields}


async def _error_response(error: ConceptError, request: Request) -> JSONResponse:
    ERRORS_TOTAL.labels(kind=error.kind.value).inc()
    try:
        async with session_scope() as db:
            error = await handle_error(error, _bind(request, db))
    except Exception as exc:
        logger.exception("Error while handling %r", error)
        return JSONResponse(
            {"msg": f"While handling below error:\n{error}\n\nAnother error occurred:\n{exc}"},
            status_code=500,
        )
    return JSONResponse({"msg": error.message}, status_code=error.status_code)


def _bind(request: Request, db) -> Concepts:  # noqa: ANN001
    fetcher = getattr(request.app.state, "source_fetcher", None)
    return Concepts.bind(db, fetcher)


def _render(result: BaseResponse, content: Any) -> Response:
    if content is not None:
        response: Response = JSONResponse(content, status_code=result.status_code)
    elif result.msg is not None:
        response = JSONResponse({"msg": result.msg}, status_code=result.status_code)
    else:
        response = Response(status_code=result.status_code)
    if result.location:
        response.headers["Location"] = result.location
    return response


def make_endpoint(route: Route) -> Callable[[Request], Awaitable[Response]]:
    names = _param_names(route.action)
    takes_session = SESSION_PARAM in names

    async def endpoint(request: Request) -> Response:
        args = await _gather_args(request, names)
        if route.schema is not None:
            try:
                args = _validate(route.schema, args)
            except ValidationError as exc:
                logger.info("%s: validation failed (%d errors)", route.name, exc.error_count())
                ACTION_TOTAL.labels(action=route.name, outcome="invalid").inc()
                return JSONResponse(VALIDATION_FAILED, status_code=400)
        if takes_session:
            args[SESSION_PARAM] = request.session

        with tracer.start_as_current_span(route.name), ACTION_LATENCY.labels(action=route.name).time():
            try:
                async with session_scope() as db:
                    result = await route.action(_bind(request, db), **args)
                    content = Responses.document(result.body) if result.body is not None else None
            except ConceptError as error:
                logger.info("%s failed: %s", route.name, error)
                ACTION_TOTAL.labels(action=route.name, outcome=error.kind.value).inc()
                return await _error_response(error, request)
            except Exception as exc:
                logger.exception("%s raised an unexpected error", route.name)
                ACTION_TOTAL.labels(action=route.name, outcome="error").inc()
                return JSONResponse({"msg": str(exc) or INTERNAL_ERROR}, status_code=500)

        ACTION_TOTAL.labels(action=route.name, outcome="ok").inc()
        return _render(result, content)

    endpoint.__name__ = route.name
    endpoint.__doc__ = route.action.__doc__
    return endpoint


def build_router(routes: list[Route]) -> APIRouter:
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            make_endpoint(route),
            methods=[route.method],
            name=route.name,
            response_model=None,
        )
    return router
