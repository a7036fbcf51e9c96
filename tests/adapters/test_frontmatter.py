"""Tests for YAML front matter helpers."""

import pytest

from projectmd.adapters.parsers import dump_yaml, load_yaml, render_front_matter, split_front_matter
from projectmd.core.exceptions import ParseError


class TestSplitFrontMatter:
    """Tests for split_front_matter."""

    def test_split(self):
        split = split_front_matter("---\na: 1\n---\nbody\n")

        assert split.yaml_text == "a: 1\n"
        assert split.body == "body\n"
        assert split.body_line == 4

    def test_separator_with_trailing_spaces(self):
        split = split_front_matter("--- \na: 1\n---\t\nbody")

        assert split.yaml_text == "a: 1\n"
        assert split.body == "body"

    def test_dashes_inside_a_line_are_not_separators(self):
        split = split_front_matter("---\ntitle: a --- b\n---\nbody\n")

        assert split.yaml_text == "title: a --- b\n"

    def test_only_first_two_separators(self):
        split = split_front_matter("---\na: 1\n---\none\n---\ntwo\n")

        assert split.body == "one\n---\ntwo\n"

    def test_crlf(self):
        split = split_front_matter("---\r\na: 1\r\n---\r\nbody\r\n")

        assert split.yaml_text == "a: 1\r\n"
        assert split.body == "body\r\n"

    def test_missing_separators(self):
        with pytest.raises(ParseError):
            split_front_matter("---\na: 1\n")


class TestLoadYaml:
    """Tests for load_yaml."""

    def test_empty_block(self):
        assert load_yaml("") == {}

    def test_timestamps_are_not_converted(self):
        data = load_yaml("created_at: 2025-01-15T10:30:00Z\nday: 2025-01-15\n")

        assert data == {"created_at": "2025-01-15T10:30:00Z", "day": "2025-01-15"}

    def test_other_scalars_still_resolve(self):
        assert load_yaml("n: 7\nok: true\nx: null\n") == {"n": 7, "ok": True, "x": None}

    def test_malformed_reports_line(self):
        with pytest.raises(ParseError) as exc_info:
            load_yaml("a: 1\nb: [2\n", source="t.md", line_offset=1)

        assert exc_info.value.line is not None
        assert exc_info.value.source == "t.md"

    def test_not_a_mapping(self):
        with pytest.raises(ParseError, match="mapping"):
            load_yaml("just text\n")


class TestDumpYaml:
    """Tests for dump_yaml and render_front_matter."""

    def test_keeps_order_and_flow_lists(self):
        text = dump_yaml({"issue_id": 3, "tags": ["a", "b"], "created_at": "2025-01-15T10:30:00Z"})

        assert text == "issue_id: 3\ntags: [a, b]\ncreated_at: 2025-01-15T10:30:00Z\n"

    def test_unicode(self):
        assert dump_yaml({"owner": "Zoë"}) == "owner: Zoë\n"

    def test_render(self):
        assert render_front_matter({"a": 1}, "# T\n") == "---\na: 1\n---\n# T\n"

    def test_render_is_a_fixed_point(self):
        data = {"issue_id": 9, "type": "bug", "tags": ["x"], "updated_at": "2025-01-20T15:45:32Z"}
        rendered = render_front_matter(data, "# Title\n\nBody\n")

        split = split_front_matter(rendered)
        again = render_front_matter(load_yaml(split.yaml_text), split.body)

        assert again == rendered
