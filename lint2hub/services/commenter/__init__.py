"""Commenter service."""

from lint2hub.services.commenter.batch import (
    compile_record_pattern,
    parse_tab_record,
    post_finding,
    process_batch,
)
from lint2hub.services.commenter.commenter import CodeHostClient, Commenter
from lint2hub.services.commenter.schemas import BatchResult, CommenterState, PendingComment

__all__ = [
    "BatchResult",
    "CodeHostClient",
    "Commenter",
    "CommenterState",
    "PendingComment",
    "compile_record_pattern",
    "parse_tab_record",
    "post_finding",
    "process_batch",
]
