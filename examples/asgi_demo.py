"""Sample ASGI application behind the reqnorm middleware.

The same codec registry decodes request bodies and encodes responses, so
each endpoint answers in the negotiated format.

Run with:
    uvicorn examples.asgi_demo:app --reload

Try:
    curl -H 'Accept: application/xml' http://localhost:8000/api/users
    curl -X POST -H 'Content-Type: application/json' \\
        -d '{"name": "carol"}' http://localhost:8000/api/users
"""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.responses import Response
from starlette.routing import Route

from reqnorm.codecs import CodecRegistry
from reqnorm.formats import FormatTable
from reqnorm.integration.asgi import (
    NormalizerMiddleware,
    get_parameters,
    get_request_format,
)

config = {
    "detect_format": True,
    "default_format": "json",
    "formats": {"json": "json", "xml": "xml", "form": "form"},
}

registry = CodecRegistry(config["formats"])
formats = FormatTable()

USERS = [{"name": "alice"}, {"name": "bob"}]


def render(request, data, status_code: int = 200) -> Response:
    format = get_request_format(request) or "json"
    encoder = registry.get_encoder(format)
    if encoder is None:
        format = "json"
        encoder = registry.get_encoder(format)
    return Response(
        encoder.encode(data, format),
        status_code=status_code,
        media_type=formats.get_mime_type(format),
    )


async def list_users(request):
    return render(request, {"user": USERS})


async def create_user(request):
    name = get_parameters(request).get("name")
    if not name:
        return render(request, {"error": "name is required"}, status_code=422)
    user = {"name": name}
    USERS.append(user)
    return render(request, user, status_code=201)


routes = [
    Route("/api/users", list_users, methods=["GET"]),
    Route("/api/users", create_user, methods=["POST"]),
]

app = Starlette(routes=routes)

app = NormalizerMiddleware(app, config_dict=config, registry=registry)

# Alternative: Load from config file
# app = NormalizerMiddleware(app, config_file="examples/config/reqnorm.yaml")

if __name__ == "__main__":
    import uvicorn

    print("Starting reqnorm ASGI demo...")
    uvicorn.run(app, host="0.0.0.0", port=8000)
