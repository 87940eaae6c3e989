"""Command resolution classifier.

Maps the resolution facts of one command name to a status code and a
detection chain following bash precedence:
alias > function > builtin/keyword > external > unknown.
"""

from typing import AbstractSet, List, Optional

from ..models.classification import ClassificationResult
from ..models.facts import CommandFacts
from ..models.status import StatusCode

CHAIN_SEPARATOR = " | "

# Tried in this order at each end, one character at most
QUOTE_CHARS = ("`", "'", '"')


def strip_quotes(text: Optional[str]) -> str:
    """Remove one surrounding quote character from each end.

    Bash reports aliases as ``ls is aliased to `ls --color=auto'``, so the
    two ends are stripped independently. Quoting inside the definition is
    left untouched.

    Args:
        text: Definition as reported by the shell

    Returns:
        Definition without its outer quote characters
    """
    if not text:
        return ""

    for quote in QUOTE_CHARS:
        if text.startswith(quote):
            text = text[1:]
            break

    for quote in QUOTE_CHARS:
        if text.endswith(quote):
            text = text[:-1]
            break

    return text


def build_detection_chain(facts: CommandFacts) -> List[str]:
    """List every resolution form found, in precedence order.

    Args:
        facts: Resolution facts for the command

    Returns:
        Chain entries such as ``alias → ls -la`` or
        ``external → /usr/bin/ls (PATH position 3)``
    """
    parts = []

    if facts.has_alias:
        parts.append(f"alias → {strip_quotes(facts.alias_definition)}")
    if facts.has_function:
        parts.append("function")
    if facts.has_builtin:
        parts.append("builtin")
    if facts.has_keyword:
        parts.append("keyword")
    for match in facts.external_matches:
        parts.append(f"external → {match}")

    return parts


def classify(
    command: str,
    facts: CommandFacts,
    whitelist: AbstractSet[str] = frozenset()
) -> ClassificationResult:
    """Classify how the shell would resolve a command.

    The status comes from the first form found in precedence order, but
    the detail lists every form so the report shows what is shadowed.
    Whitelisted names turn alias and function overrides into
    WHITELISTED_OVERRIDE; other statuses ignore the whitelist.

    Args:
        command: Command name
        facts: Resolution facts for the command
        whitelist: Names whose overrides have been reviewed

    Returns:
        ClassificationResult for the command
    """
    chain = build_detection_chain(facts)

    if facts.has_alias:
        status, label = StatusCode.ALIAS_OVERRIDE, "alias override"
    elif facts.has_function:
        status, label = StatusCode.FUNCTION_OVERRIDE, "function override"
    elif facts.has_builtin:
        status, label = StatusCode.BUILTIN, "builtin"
    elif facts.has_keyword:
        status, label = StatusCode.BUILTIN, "keyword"
    elif facts.external_matches:
        status, label = StatusCode.EXTERNAL, "external command"
    else:
        return ClassificationResult(command=command, status=StatusCode.UNKNOWN)

    if status in (StatusCode.ALIAS_OVERRIDE, StatusCode.FUNCTION_OVERRIDE):
        if command in whitelist:
            status = StatusCode.WHITELISTED_OVERRIDE
            label = f"whitelisted {label}"

    detail = CHAIN_SEPARATOR.join([label] + chain)
    return ClassificationResult(command=command, status=status, detail=detail)


class CommandClassifier:
    """Classifier bound to the whitelist of one run."""

    def __init__(self, whitelist: AbstractSet[str] = frozenset()):
        """Initialize the classifier.

        Args:
            whitelist: Names whose overrides have been reviewed
        """
        self.whitelist = frozenset(whitelist)

    def classify(self, command: str, facts: CommandFacts) -> ClassificationResult:
        return classify(command, facts, self.whitelist)

    def __call__(self, command: str, facts: CommandFacts) -> ClassificationResult:
        return self.classify(command, facts)
