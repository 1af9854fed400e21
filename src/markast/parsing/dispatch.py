#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markast/parsing/dispatch.py
"""Rule registry and the priority-ordered match loop.

A :class:`Rule` pairs a matcher with a node builder. The :class:`Dispatcher`
sorts its rules once, by priority tier and then by name, and repeatedly
tries them in that order against the unconsumed remainder of the input.
The first rule that matches consumes exactly its matched text and builds at
most one node.

Matchers are normally produced from a compiled regex by one of the scope
helpers:

- :func:`block_regex` only fires in block scope
- :func:`inline_regex` only fires in inline scope
- :func:`any_scope_regex` fires regardless of scope

Every pattern used with these helpers must be anchored at the start of the
input and must never match the empty string.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from markast.ast.nodes import Node, Text
from markast.exceptions import EngineInvariantError, MarkastError, ParsingError, ValidationError

if TYPE_CHECKING:
    from markast.parsing.state import CompileContext, ParseState

logger = logging.getLogger(__name__)

Matcher = Callable[[str, "ParseState", str], Optional["re.Match[str]"]]
Builder = Callable[["re.Match[str]", "CompileContext", "ParseState"], Optional[Node]]


class Priority(IntEnum):
    """Priority tiers; lower values are tried first."""

    #: Constructs that must be seen before anything else (definitions, autolinks)
    MAX = 1
    #: Block-level constructs
    HIGH = 2
    #: Inline constructs that pre-empt ordinary inline rules
    MED = 3
    #: Ordinary inline constructs
    LOW = 4
    #: Plain text fallback
    MIN = 5


@dataclass(frozen=True)
class Rule:
    """A named grammar rule.

    Parameters
    ----------
    name : str
        Unique rule name; breaks ties between rules of the same priority
    priority : Priority
        Priority tier
    match : callable
        ``match(source, state, previous)`` returning a match anchored at the
        start of ``source``, or None. ``previous`` is the text consumed by the
        preceding match in the same sequence.
    build : callable
        ``build(match, context, state)`` returning the node for the match, or
        None when the rule consumes input without producing a node

    """

    name: str
    priority: Priority
    match: Matcher
    build: Builder


def block_regex(regex: re.Pattern[str]) -> Matcher:
    """Create a matcher that only fires in block scope."""

    def match(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
        if state.inline:
            return None
        return regex.match(source)

    return match


def inline_regex(regex: re.Pattern[str]) -> Matcher:
    """Create a matcher that only fires in inline scope."""

    def match(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
        if not state.inline:
            return None
        return regex.match(source)

    return match


def any_scope_regex(regex: re.Pattern[str]) -> Matcher:
    """Create a matcher that ignores the current scope."""

    def match(source: str, state: ParseState, previous: str) -> Optional[re.Match[str]]:
        return regex.match(source)

    return match


class Dispatcher:
    """Ordered set of rules and the loop that applies them.

    Parameters
    ----------
    rules : iterable of Rule
        Rules to register. Names must be unique and priorities must be one of
        the :class:`Priority` tiers.

    Raises
    ------
    ValidationError
        If two rules share a name or a rule has an unknown priority

    Examples
    --------
        >>> import re
        >>> text = Rule("text", Priority.MIN, any_scope_regex(re.compile(r"[\\s\\S]+")),
        ...             lambda m, ctx, st: Text(content=m.group(0)))
        >>> Dispatcher([text]).rule_names
        ('text',)

    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        seen: set[str] = set()
        validated: list[Rule] = []
        for rule in rules:
            if rule.name in seen:
                raise ValidationError(
                    f"Duplicate rule name: {rule.name!r}",
                    parameter_name="rules",
                    parameter_value=rule.name,
                )
            if isinstance(rule.priority, bool) or rule.priority not in set(Priority):
                raise ValidationError(
                    f"Invalid priority for rule {rule.name!r}: {rule.priority!r}",
                    parameter_name="priority",
                    parameter_value=rule.priority,
                )
            seen.add(rule.name)
            validated.append(rule)

        self._rules: tuple[Rule, ...] = tuple(sorted(validated, key=lambda r: (int(r.priority), r.name)))
        logger.debug(f"Dispatcher order: {', '.join(self.rule_names)}")

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in match order."""
        return self._rules

    @property
    def rule_names(self) -> tuple[str, ...]:
        """Rule names in match order."""
        return tuple(rule.name for rule in self._rules)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def parse(self, source: str, state: ParseState, context: CompileContext) -> list[Node]:
        """Run the match loop over ``source``.

        Parameters
        ----------
        source : str
            Text to parse
        state : ParseState
            Scope for every rule invocation in this sequence
        context : CompileContext
            Per-compile context handed to builders

        Returns
        -------
        list of Node
            Nodes in source order, with adjacent Text nodes merged

        Raises
        ------
        EngineInvariantError
            If a rule matches without consuming input, or no rule matches a
            non-empty remainder
        ParsingError
            If a rule builder fails with an error that is not a markast error

        """
        result: list[Node] = []
        previous = ""

        while source:
            for rule in self._rules:
                match = rule.match(source, state, previous)
                if match is None:
                    continue

                consumed = match.group(0)
                if not consumed:
                    raise EngineInvariantError(
                        f"Rule {rule.name!r} matched without consuming input",
                        rule_name=rule.name,
                        remaining=source,
                    )

                source = source[len(consumed) :]
                try:
                    node = rule.build(match, context, state)
                except MarkastError:
                    raise
                except Exception as e:
                    raise ParsingError(f"Rule {rule.name!r} failed: {e!r}", original_error=e) from e
                if node is not None:
                    _append_coalescing(result, node)
                previous = consumed
                break
            else:
                raise EngineInvariantError("No rule matched the remaining input", remaining=source)

        return result


def _append_coalescing(result: list[Node], node: Node) -> None:
    if isinstance(node, Text) and result and isinstance(result[-1], Text):
        result[-1] = Text(content=result[-1].content + node.content, metadata=result[-1].metadata)
    else:
        result.append(node)
