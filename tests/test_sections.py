"""Tests for prnote.sections module."""

from prnote.sections import (
    SectionEntry,
    SectionMap,
    SectionName,
    extract_sections,
    is_heading,
    render_sections,
    scan_blocks,
)


class TestScanBlocks:
    """Tests for scan_blocks function."""

    def test_preamble_only(self):
        """Test that text without headings is a single preamble block."""
        blocks = scan_blocks("Some notes\nmore notes")
        assert len(blocks) == 1
        assert blocks[0].heading is None
        assert blocks[0].body == "Some notes\nmore notes"

    def test_splits_on_headings(self):
        """Test that each heading starts a new block."""
        blocks = scan_blocks("intro\n## One\na\n### Two\nb")
        assert [b.heading for b in blocks] == [None, "## One", "### Two"]
        assert blocks[1].body == "a"
        assert blocks[2].body == "b"

    def test_ignores_headings_in_code_fences(self):
        """Test that '#' lines inside fenced code are body text."""
        text = "## Test\n```bash\n# run the suite\npytest\n```\ndone"
        blocks = scan_blocks(text)
        assert [b.heading for b in blocks] == [None, "## Test"]
        assert "# run the suite" in blocks[1].body

    def test_tilde_fences(self):
        """Test that tilde fences are recognized too."""
        blocks = scan_blocks("## Test\n~~~\n## not a heading\n~~~")
        assert len(blocks) == 2

    def test_longer_fence_not_closed_by_shorter(self):
        """Test that a four-backtick fence stays open across a three-backtick line."""
        text = "## Test\n````markdown\n```\n## Changes\n```\n````\n## Changes\n- a"
        blocks = scan_blocks(text)
        assert [b.heading for b in blocks] == [None, "## Test", "## Changes"]
        assert blocks[2].body == "- a"

    def test_fence_with_info_string_does_not_close(self):
        """Test that a fence line with an info string doesn't close an open fence."""
        text = "## Test\n```\n```python\n## Changes\n```\ndone"
        blocks = scan_blocks(text)
        assert [b.heading for b in blocks] == [None, "## Test"]

    def test_fence_closed_by_other_character(self):
        """Test that a tilde line doesn't close a backtick fence."""
        blocks = scan_blocks("## Test\n```\n~~~\n## Changes\n```")
        assert len(blocks) == 2

    def test_handles_crlf(self):
        """Test Windows line endings."""
        blocks = scan_blocks("## Changes\r\n- a\r\n")
        assert blocks[1].heading == "## Changes"
        assert blocks[1].body.strip() == "- a"


class TestIsHeading:
    """Tests for is_heading function."""

    def test_atx_headings(self):
        """Test heading levels one to six."""
        assert is_heading("# Title")
        assert is_heading("###### Deep")

    def test_not_headings(self):
        """Test lines that are not headings."""
        assert not is_heading("#hashtag")
        assert not is_heading("####### seven")
        assert not is_heading("text ## Changes")


class TestExtractSections:
    """Tests for extract_sections function."""

    def test_no_headings_all_absent(self):
        """Test that a body without known headings has nothing present."""
        section_map = extract_sections("Some notes about this PR")
        for name in SectionName:
            assert section_map.is_present(name) is False
            assert section_map.content(name) == ""
        assert section_map.has_known_heading is False
        assert section_map.has_free_text is True

    def test_empty_body(self):
        """Test that an empty body yields an empty map."""
        section_map = extract_sections("")
        assert section_map.has_known_heading is False
        assert section_map.has_free_text is False

    def test_none_body(self):
        """Test that None is treated as empty."""
        assert extract_sections(None).has_known_heading is False

    def test_changes_between_headings(self):
        """Test that Changes content stops at the next heading and is trimmed."""
        section_map = extract_sections("## Changes\n  - Add login\n- Fix typo  \n## Test\nRun it")
        assert section_map.content(SectionName.CHANGES) == "- Add login\n- Fix typo"
        assert section_map.content(SectionName.TEST) == "Run it"

    def test_present_but_empty(self):
        """Test that an empty section is present with empty content."""
        section_map = extract_sections("## Description\n\n## Test\n")
        assert section_map.is_present(SectionName.DESCRIPTION)
        assert section_map.content(SectionName.DESCRIPTION) == ""
        assert section_map.is_present(SectionName.TEST)
        assert not section_map.is_present(SectionName.CHANGES)

    def test_all_sections_present_but_empty_differs_from_none(self):
        """Test that all-empty sections differ from a body with no headings."""
        body = "\n".join(name.heading for name in SectionName)
        section_map = extract_sections(body)
        assert all(section_map.is_present(name) for name in SectionName)
        assert section_map != extract_sections("")

    def test_stops_at_any_heading_level(self):
        """Test that a subheading ends the section."""
        section_map = extract_sections("## Description\nSummary\n### Details\nMore")
        assert section_map.content(SectionName.DESCRIPTION) == "Summary"
        assert section_map.has_free_text is True

    def test_case_sensitive(self):
        """Test that heading matching is case-sensitive."""
        section_map = extract_sections("## changes\n- a")
        assert not section_map.is_present(SectionName.CHANGES)

    def test_requires_exact_prefix(self):
        """Test that only '## ' headings match."""
        section_map = extract_sections("### Changes\n- a\n# Test\nb")
        assert not section_map.is_present(SectionName.CHANGES)
        assert not section_map.is_present(SectionName.TEST)

    def test_trailing_whitespace_on_heading(self):
        """Test that trailing spaces after the heading are ignored."""
        section_map = extract_sections("## API   \nGET /users")
        assert section_map.content(SectionName.API) == "GET /users"

    def test_similar_heading_not_matched(self):
        """Test that '## Testing' is not the Test section."""
        section_map = extract_sections("## Testing\nRun it")
        assert not section_map.is_present(SectionName.TEST)

    def test_first_match_wins(self):
        """Test that the first of duplicate headings is authoritative."""
        section_map = extract_sections("## Test\nfirst\n## Test\nsecond")
        assert section_map.content(SectionName.TEST) == "first"

    def test_preamble_sets_free_text(self):
        """Test that text before the first heading is flagged."""
        section_map = extract_sections("Reviewer notes\n\n## Description\nfoo")
        assert section_map.has_free_text is True
        assert section_map.content(SectionName.DESCRIPTION) == "foo"

    def test_structured_only_has_no_free_text(self):
        """Test that a purely structured body has no free text."""
        section_map = extract_sections("## Description\nfoo\n\n## Test\nbar")
        assert section_map.has_free_text is False


class TestHasKnownHeading:
    """Tests for SectionMap.has_known_heading."""

    def test_detects_known_heading(self):
        """Test detection of a known heading."""
        assert extract_sections("## Description\nfoo").has_known_heading

    def test_ignores_unknown_heading(self):
        """Test that unknown headings don't count."""
        assert not extract_sections("## Summary\nfoo").has_known_heading

    def test_ignores_heading_in_code(self):
        """Test that headings inside code fences don't count."""
        assert not extract_sections("```\n## Description\n```").has_known_heading


class TestRenderSections:
    """Tests for render_sections function."""

    def test_renders_present_sections_in_order(self):
        """Test rendering with an explicit order."""
        section_map = SectionMap(
            entries={
                SectionName.TEST: SectionEntry(present=True, content="Run it"),
                SectionName.DESCRIPTION: SectionEntry(present=True, content="foo"),
            }
        )
        text = render_sections(section_map, [SectionName.DESCRIPTION, SectionName.TEST])
        assert text == "## Description\nfoo\n\n## Test\nRun it"

    def test_empty_section_renders_heading_only(self):
        """Test that an empty section renders as its heading."""
        section_map = SectionMap(entries={SectionName.CHANGES: SectionEntry(present=True)})
        assert render_sections(section_map) == "## Changes"

    def test_extraction_round_trip(self):
        """Test that extracting a rendered map reproduces it."""
        body = (
            "## Description\nAdds login.\n\n"
            "## Changes\n- Add form\n- Add route\n\n"
            "## API\n\n"
            "## Test\n```bash\n# unit tests\npytest\n```"
        )
        section_map = extract_sections(body)
        rendered = render_sections(section_map)
        assert extract_sections(rendered) == section_map
        assert extract_sections(render_sections(extract_sections(rendered))) == section_map
