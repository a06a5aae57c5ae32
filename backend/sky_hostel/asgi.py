"""
ASGI config for sky_hostel project.

Serves Django behind a thin wrapper that answers `/health` and the
lifespan protocol itself.
"""

import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'sky_hostel.settings.production')

from django.core.asgi import get_asgi_application  # noqa: E402

django_asgi_app = get_asgi_application()

HEALTH_PATH = "/health"


async def _lifespan(receive, send):
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


async def _health(send):
    await send({
        "type": "http.response.start",
        "status": 200,
        "headers": [[b"content-type", b"text/plain"]],
    })
    await send({"type": "http.response.body", "body": b"OK"})


class HealthCheckMiddleware:
    """
    Answers load balancer health checks without touching Django, so ALLOWED_HOSTS
    and the database are not involved.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] == "lifespan":
            return await _lifespan(receive, send)

        if scope["type"] == "http" and scope.get("path") == HEALTH_PATH:
            return await _health(send)

        await self.app(scope, receive, send)


application = HealthCheckMiddleware(django_asgi_app)
