from __future__ import annotations

from prometheus_client import Counter

# Document building
documents_built_total = Counter(
    "documents_built_total", "Documents produced by document builders", labelnames=("builder",)
)
document_build_failures_total = Counter(
    "document_build_failures_total",
    "Failures while opening payloads or converting rows",
    labelnames=("kind",),
)

# Authentication
auth_header_failures_total = Counter(
    "auth_header_failures_total",
    "Authenticators that fell back to no headers after a credential failure",
    labelnames=("authenticator",),
)
