"""Tests for the command resolution classifier."""

import pytest

from check_builtins.classifier import build_detection_chain, classify, strip_quotes
from check_builtins.models import CommandFacts, ExternalMatch, StatusCode


class TestStripQuotes:
    """strip_quotes tests."""

    def test_bash_type_quoting(self):
        """Backtick on the left and single quote on the right are removed."""
        assert strip_quotes("`ls --color=auto'") == "ls --color=auto"

    def test_double_quotes(self):
        """Surrounding double quotes are removed."""
        assert strip_quotes('"grep -n"') == "grep -n"

    def test_only_one_layer(self):
        """Only one character is removed at each end."""
        assert strip_quotes("''echo hi''") == "'echo hi'"

    def test_inner_quoting_kept(self):
        """Quotes inside the definition stay untouched."""
        assert strip_quotes("`echo \"a b\" done'") == 'echo "a b" done'

    def test_backtick_tried_first(self):
        """The first matching quote character is used at each end."""
        assert strip_quotes("`'x'`") == "'x'"

    def test_unquoted_and_empty(self):
        """Unquoted text and None come back unchanged or empty."""
        assert strip_quotes("ls -la") == "ls -la"
        assert strip_quotes(None) == ""
        assert strip_quotes("") == ""


class TestPrecedence:
    """Precedence order tests."""

    def test_alias_wins_over_everything(self):
        """An alias dominates function, builtin and external forms."""
        facts = CommandFacts(
            has_alias=True,
            alias_definition="`echo hi'",
            has_function=True,
            has_builtin=True,
            external_matches=(ExternalMatch("/bin/echo", 1),),
        )
        result = classify("echo", facts)
        assert result.status == StatusCode.ALIAS_OVERRIDE

    def test_alias_with_builtin(self):
        """Alias beats builtin."""
        facts = CommandFacts(has_alias=True, alias_definition="x", has_builtin=True)
        assert classify("cd", facts).status == StatusCode.ALIAS_OVERRIDE

    def test_function_beats_builtin(self):
        """A function shadows a builtin of the same name."""
        facts = CommandFacts(has_function=True, has_builtin=True)
        result = classify("cd", facts)
        assert result.status == StatusCode.FUNCTION_OVERRIDE
        assert result.detail == "function override | function | builtin"

    def test_builtin(self):
        """A builtin alone is status 0."""
        result = classify("cd", CommandFacts(has_builtin=True))
        assert result.status == StatusCode.BUILTIN
        assert result.detail == "builtin | builtin"

    def test_keyword(self):
        """Keywords share status 0 with builtins."""
        result = classify("if", CommandFacts(has_keyword=True))
        assert result.status == StatusCode.BUILTIN
        assert result.detail == "keyword | keyword"

    def test_external(self):
        """Executables on PATH are external commands."""
        facts = CommandFacts(external_matches=(ExternalMatch("/usr/bin/wget", 3),))
        result = classify("wget", facts)
        assert result.status == StatusCode.EXTERNAL
        assert result.detail == "external command | external → /usr/bin/wget (PATH position 3)"

    def test_unknown(self):
        """Empty facts give UNKNOWN with an empty detail."""
        result = classify("nonexistent_xyz", CommandFacts.empty())
        assert result.status == StatusCode.UNKNOWN
        assert result.detail == ""
        assert result.command == "nonexistent_xyz"


class TestDetectionChain:
    """Detail text tests."""

    def test_alias_shadowing_external(self):
        """Alias definition and the shadowed executable both appear."""
        facts = CommandFacts(
            has_alias=True,
            alias_definition="ls --color=auto",
            has_builtin=False,
            external_matches=(ExternalMatch("/usr/bin/ls", 21),),
        )
        result = classify("ls", facts, frozenset())
        assert result.status == StatusCode.ALIAS_OVERRIDE
        assert "ls --color=auto" in result.detail
        assert "/usr/bin/ls (PATH position 21)" in result.detail
        assert result.detail == (
            "alias override | alias → ls --color=auto | "
            "external → /usr/bin/ls (PATH position 21)"
        )

    def test_builtin_lists_all_externals(self):
        """Every external match is listed even when a builtin wins."""
        facts = CommandFacts(
            has_builtin=True,
            external_matches=(
                ExternalMatch("/usr/bin/echo", 21),
                ExternalMatch("/bin/echo", 23),
            ),
        )
        result = classify("echo", facts)
        assert result.status == StatusCode.BUILTIN
        assert "/usr/bin/echo (PATH position 21)" in result.detail
        assert "/bin/echo (PATH position 23)" in result.detail
        assert result.detail.index("/usr/bin/echo") < result.detail.index("/bin/echo (")

    def test_chain_order(self):
        """Chain entries follow alias, function, builtin, keyword, external."""
        facts = CommandFacts(
            has_alias=True,
            alias_definition="`t'",
            has_function=True,
            has_builtin=True,
            has_keyword=True,
            external_matches=(ExternalMatch("/bin/t", 2),),
        )
        assert build_detection_chain(facts) == [
            "alias → t",
            "function",
            "builtin",
            "keyword",
            "external → /bin/t (PATH position 2)",
        ]

    def test_external_without_position(self):
        """A match outside the search path is shown without a position."""
        facts = CommandFacts(external_matches=(ExternalMatch("/opt/x/tool"),))
        assert classify("tool", facts).detail == "external command | external → /opt/x/tool"

    def test_alias_definition_verbatim(self):
        """Embedded quoting in an alias survives."""
        facts = CommandFacts(has_alias=True, alias_definition="`grep --color='auto''")
        assert "alias → grep --color='auto'" in classify("grep", facts).detail


class TestWhitelist:
    """Whitelist handling tests."""

    def test_whitelisted_alias(self):
        """A whitelisted alias becomes WHITELISTED_OVERRIDE."""
        facts = CommandFacts(has_alias=True, alias_definition="`ls -F'")
        result = classify("ls", facts, {"ls"})
        assert result.status == StatusCode.WHITELISTED_OVERRIDE
        assert result.detail.startswith("whitelisted alias override | ")

    def test_whitelisted_function(self):
        """A whitelisted function becomes WHITELISTED_OVERRIDE."""
        result = classify("cd", CommandFacts(has_function=True, has_builtin=True), {"cd"})
        assert result.status == StatusCode.WHITELISTED_OVERRIDE
        assert result.detail == "whitelisted function override | function | builtin"

    def test_other_names_not_whitelisted(self):
        """Only the listed name is exempted."""
        facts = CommandFacts(has_alias=True, alias_definition="x")
        assert classify("ls", facts, {"grep"}).status == StatusCode.ALIAS_OVERRIDE

    @pytest.mark.parametrize("facts, expected", [
        (CommandFacts(has_builtin=True), StatusCode.BUILTIN),
        (CommandFacts(external_matches=(ExternalMatch("/bin/rm", 1),)), StatusCode.EXTERNAL),
        (CommandFacts(), StatusCode.UNKNOWN),
    ])
    def test_whitelist_ignored_for_other_statuses(self, facts, expected):
        """Builtin, external and unknown statuses ignore the whitelist."""
        plain = classify("cmd", facts)
        listed = classify("cmd", facts, {"cmd"})
        assert plain.status == listed.status == expected
        assert plain.detail == listed.detail

    def test_alias_status_always_alias_derived(self):
        """Aliased names never classify as builtin, external or unknown."""
        facts = CommandFacts(has_alias=True, alias_definition="y", has_builtin=True)
        for whitelist in (frozenset(), frozenset({"cmd"})):
            assert classify("cmd", facts, whitelist).status in (
                StatusCode.ALIAS_OVERRIDE,
                StatusCode.WHITELISTED_OVERRIDE,
            )
