"""API — a small JSON service on switchyard.

Shows the whole pipeline: global access logging and CORS, bearer auth
and validation scoped to ``/api/users``, a ``:user_id`` param hook that
loads the user once for every route that binds it, and a rate limiter
whose sweeper runs as a background task.

Run:
    switchyard run app:app          (from examples/api)
    switchyard routes app:app
"""

import threading
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from switchyard import App, Flow, g
from switchyard.middleware import (
    AccessLogMiddleware,
    BearerAuthMiddleware,
    CORSMiddleware,
    FieldRule,
    RateLimitConfig,
    RateLimitMiddleware,
    RateLimitStore,
    ValidationMiddleware,
)

app = App()

_started = time.monotonic()
_rate_limits = RateLimitStore(RateLimitConfig(max_requests=100, window_seconds=60))

app.use(AccessLogMiddleware())
app.use(CORSMiddleware())
app.use("/api/*", RateLimitMiddleware(_rate_limits))
app.use(
    "/api/users",
    BearerAuthMiddleware(),
    ValidationMiddleware(
        {
            "name": FieldRule(required=True, expected_type=str, min_length=2, max_length=100),
            "email": FieldRule(required=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"),
        }
    ),
)
app.background(_rate_limits.run_sweeper)


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    email: str


_users: dict[int, User] = {
    1: User(id=1, name="John Doe", email="john@example.com"),
    2: User(id=2, name="Jane Smith", email="jane@example.com"),
}
_next_id = 3
_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/")
def index(request, response):
    response.write_head(200, {"Content-Type": "text/html; charset=utf-8"})
    response.end(
        "<!DOCTYPE html>\n"
        "<html><head><title>switchyard</title></head><body>"
        "<h1>switchyard</h1>"
        '<a href="/api/health">Health Check</a> | <a href="/api/users">Users API</a>'
        "</body></html>"
    )


@app.get("/api/health")
def health(request, response):
    response.json(
        {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": time.monotonic() - _started,
        }
    )


@app.get("/api/users")
def list_users(request, response):
    with _lock:
        users = sorted(_users.values(), key=lambda u: u.id)
    response.json([asdict(u) for u in users])


@app.post("/api/users")
async def create_user(request, response):
    global _next_id
    body = await request.json()
    with _lock:
        user = User(id=_next_id, name=body["name"], email=body["email"])
        _users[user.id] = user
        _next_id += 1
    response.json(asdict(user), status=201, headers={"Location": f"/api/users/{user.id}"})


@app.param("user_id")
def load_user(request, response, value, name):
    """Resolve ``:user_id`` to ``g.user_record``, or answer 404."""
    user = _users.get(int(value)) if value.isdigit() else None
    if user is None:
        response.json({"error": "Not Found", "message": f"User {value} not found"}, status=404)
        return Flow.STOP
    g.user_record = user
    return Flow.CONTINUE


@app.get("/api/users/:user_id")
def show_user(request, response):
    response.json(asdict(g.user_record))


@app.delete("/api/users/:user_id")
def delete_user(request, response):
    with _lock:
        _users.pop(g.user_record.id, None)
    response.write_head(204)
    response.end()


if __name__ == "__main__":
    app.run()
