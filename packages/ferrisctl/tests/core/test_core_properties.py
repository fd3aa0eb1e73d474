from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from ferrisctl.commands.docs.link_check import DEAD_LINK_MARKER, LinkCheckResult, dead_links
from ferrisctl.config.loader import deep_merge
from ferrisctl.core.exit_codes import ERR_NOT_FOUND

_keys = st.text(alphabet="abcdefgh", min_size=1, max_size=3)
_leaves = st.one_of(st.integers(), st.text(max_size=5), st.booleans())
_trees = st.recursive(_leaves, lambda children: st.dictionaries(_keys, children, max_size=4), max_leaves=12)
_mappings = st.dictionaries(_keys, _trees, max_size=5)


@given(_mappings)
def test_merge_with_empty_override_is_identity(base: dict) -> None:
    assert deep_merge(base, {}) == base
    assert deep_merge({}, base) == base


@given(_mappings, _mappings)
def test_override_keys_always_present(base: dict, override: dict) -> None:
    merged = deep_merge(base, override)
    assert set(merged) == set(base) | set(override)
    for key, value in override.items():
        if not isinstance(value, dict):
            assert merged[key] == value


@given(st.lists(st.text(alphabet="abc /:.→0123456789", max_size=20), max_size=10))
def test_clean_output_has_no_dead_links(lines: list[str]) -> None:
    assert dead_links("\n".join(lines)) == []


@given(st.lists(st.text(alphabet="abc /:.0123456789", min_size=1, max_size=20), min_size=1, max_size=10))
def test_every_marked_line_is_reported(urls: list[str]) -> None:
    output = "\n".join(f"  {DEAD_LINK_MARKER} {url} → Status: 404" for url in urls)
    found = dead_links(output)
    assert len(found) == len(urls)
    assert all(line.startswith(DEAD_LINK_MARKER) for line in found)


@given(st.integers(min_value=0, max_value=255))
def test_link_result_ok_depends_on_dead_links_and_tool(code: int) -> None:
    assert LinkCheckResult("a.md", code, ()).ok is (code != ERR_NOT_FOUND)
    assert LinkCheckResult("a.md", code, ("[✖] x",)).ok is False


def test_ferris_profile_has_no_deadline() -> None:
    assert settings.default.deadline is None
