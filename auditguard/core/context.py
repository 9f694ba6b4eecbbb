# auditguard/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
actor_id_ctx = contextvars.ContextVar("actor_id", default=None)
# Nesting depth of read-only scopes in the current logical context
read_only_depth_ctx = contextvars.ContextVar("read_only_depth", default=0)
