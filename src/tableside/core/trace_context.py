"""Request-scoped context variables for logging."""

import contextvars

# Trace id of the request being served
trace_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trace_id", default=None
)

# User id of the staff member making the request (set once the actor is resolved)
actor_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "actor_id", default=None
)
