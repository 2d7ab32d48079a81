# Async server action check: functions whose body starts with the "use server"
# directive must be declared async.

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from tree_sitter import Node as TSNode

from actionscan.context import FileContext, get_source_span
from actionscan.findings.models import Finding, Fix, Location, Suggestion
from actionscan.nodes import FunctionNode, build_function_node, is_function_node
from actionscan.rules.base import DEFAULT_SEVERITY, Rule

if TYPE_CHECKING:
    from actionscan.config import Config

logger = logging.getLogger(__name__)

RULE_ID = "async-server-action"

SERVER_DIRECTIVE = "use server"

MESSAGE_ASYNC_SERVER_ACTION = "async-server-action"
MESSAGE_SUGGEST_ASYNC = "suggest-async"

MESSAGES: dict[str, str] = {
    MESSAGE_ASYNC_SERVER_ACTION: "Server Actions must be async",
    MESSAGE_SUGGEST_ASYNC: "Make {function_name} async",
}

ANONYMOUS_FUNCTION_NAME = "this function"

ASYNC_PREFIX = "async "


def _walk(node: TSNode) -> Iterator[TSNode]:
    """Yield every descendant of node in document order (DFS)."""
    yield node
    for child in node.children:
        yield from _walk(child)


def has_server_directive(node: FunctionNode) -> bool:
    """True if the function body opens with the exact "use server" directive."""
    if node.body is None:
        return False
    statement = node.body.first_statement
    if statement is None or statement.type != "expression_statement":
        return False
    return statement.value == SERVER_DIRECTIVE


def matches(node: FunctionNode) -> bool:
    """
    True for a non-async, non-generator function whose first statement is "use server".

    Generators and getter/setter methods never match, with or without the directive.
    """
    if node.is_async or node.is_generator or node.is_accessor:
        return False
    return has_server_directive(node)


def display_name(node: FunctionNode) -> str:
    """The function's own identifier in backticks, or a generic phrase when anonymous."""
    if node.name:
        return f"`{node.name}`"
    return ANONYMOUS_FUNCTION_NAME


def render_message(message_id: str, **data: str) -> str:
    return MESSAGES[message_id].format(**data)


def build_fix(node: FunctionNode) -> Fix:
    """Insert `async ` right before the function's own first token (a method's key)."""
    row, col = node.async_insert_point
    return Fix(offset=node.async_insert_byte, text=ASYNC_PREFIX, line=row + 1, column=col + 1)


def report(
    node: FunctionNode,
    context: FileContext,
    rule_id: str = RULE_ID,
    severity: str = DEFAULT_SEVERITY,
) -> Finding:
    """Build the finding for a matching function: one message, one suggestion."""
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    snippet = context.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    suggestion = Suggestion(
        message_id=MESSAGE_SUGGEST_ASYNC,
        description=render_message(MESSAGE_SUGGEST_ASYNC, function_name=display_name(node)),
        fix=build_fix(node),
    )
    return Finding(
        rule_id=rule_id,
        message_id=MESSAGE_ASYNC_SERVER_ACTION,
        message=render_message(MESSAGE_ASYNC_SERVER_ACTION),
        location=Location(
            path=context.path,
            line=start_row + 1,
            column=start_col + 1,
            end_line=end_row + 1,
            end_column=end_col + 1,
            snippet=snippet.splitlines()[0] if snippet else None,
        ),
        severity=severity,
        suggestions=(suggestion,),
    )


class AsyncServerActionRule(Rule):
    """Require functions with the `use server` directive to be async."""

    id = RULE_ID
    name = "Async server action"
    description = "Require functions with the `use server` directive to be async"
    category = "Possible Errors"
    has_suggestions = True

    def run(self, context: FileContext, config: Config | None) -> list[Finding]:
        findings: list[Finding] = []
        severity = self.severity(config)
        for ts_node in _walk(context.root_node):
            if not is_function_node(ts_node):
                continue
            node = build_function_node(context.source, ts_node)
            if node is None or not matches(node):
                continue
            logger.debug(
                "Sync server action at %s:%d: %s",
                context.path,
                node.start_point[0] + 1,
                get_source_span(context, ts_node).split("\n", 1)[0],
            )
            findings.append(report(node, context, rule_id=self.id, severity=severity))
        return findings
