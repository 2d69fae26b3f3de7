from __future__ import annotations

import unittest

from lxml import etree

from resx_tools.entries import (
    EntryFlags,
    collect_strings,
    find_entry,
    has_space_marker,
    is_translatable_string,
    parse_flags,
)


def data(xml: str) -> etree._Element:
    return etree.fromstring(xml)


class ParseFlagsTests(unittest.TestCase):
    def test_no_comment_has_no_flags(self) -> None:
        self.assertEqual(parse_flags(None), EntryFlags())
        self.assertEqual(parse_flags(""), EntryFlags())

    def test_tokens_match_as_case_insensitive_substrings(self) -> None:
        self.assertEqual(parse_flags("please !skip this"), EntryFlags(skip=True))
        self.assertEqual(parse_flags("reviewed!Edit"), EntryFlags(edit=True))
        self.assertEqual(parse_flags("!SKIP !EDIT"), EntryFlags(skip=True, edit=True))

    def test_plain_words_are_not_tokens(self) -> None:
        self.assertEqual(parse_flags("skip edit"), EntryFlags())


class ClassifierTests(unittest.TestCase):
    def test_plain_string_is_translatable(self) -> None:
        entry = data('<data name="Hello" xml:space="preserve"><value>Hi</value></data>')
        self.assertTrue(is_translatable_string(entry))

    def test_space_marker_matches_on_local_name(self) -> None:
        entry = data('<data xmlns:x="urn:x" name="A" x:space="preserve"><value/></data>')
        self.assertTrue(has_space_marker(entry))
        self.assertTrue(has_space_marker(data('<data name="A" space="default"/>')))

    def test_missing_space_marker_is_not_a_string(self) -> None:
        entry = data('<data name="Hello"><value>Hi</value></data>')
        self.assertFalse(is_translatable_string(entry))

    def test_typed_entry_is_not_a_string(self) -> None:
        entry = data(
            '<data name="Logo" type="System.Resources.ResXFileRef" xml:space="preserve">'
            "<value>imgs/logo.png;System.Drawing.Bitmap</value></data>"
        )
        self.assertFalse(is_translatable_string(entry))

    def test_reserved_prefix_is_excluded(self) -> None:
        entry = data('<data name="&gt;&gt;Label.Name" xml:space="preserve"><value>x</value></data>')
        self.assertFalse(is_translatable_string(entry))

    def test_skip_comment_in_any_case_is_excluded(self) -> None:
        for comment in ("!SKIP", "!skip", "do not translate !Skip please"):
            entry = data(
                f'<data name="A" xml:space="preserve"><value>x</value><comment>{comment}</comment></data>'
            )
            self.assertFalse(is_translatable_string(entry), comment)

    def test_edit_comment_stays_translatable(self) -> None:
        entry = data('<data name="A" xml:space="preserve"><value>x</value><comment>!EDIT</comment></data>')
        self.assertTrue(is_translatable_string(entry))


class CollectStringsTests(unittest.TestCase):
    def test_collects_only_translatable_data_in_document_order(self) -> None:
        root = data(
            """<root>
              <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>
              <data name="B" xml:space="preserve"><value>b</value></data>
              <data name="Icon" type="System.Resources.ResXFileRef"><value>a.ico;System.Drawing.Icon</value></data>
              <!-- comment node -->
              <data name="A" xml:space="preserve"><value>a</value></data>
              <data name="C" xml:space="preserve"><value>c</value><comment>!SKIP</comment></data>
            </root>"""
        )
        self.assertEqual([e.get("name") for e in collect_strings(root)], ["B", "A"])

    def test_find_entry_returns_first_match(self) -> None:
        root = data(
            """<root>
              <data name="A"><value>first</value></data>
              <data name="A"><value>second</value></data>
            </root>"""
        )
        self.assertEqual(find_entry(root, "A").findtext("value"), "first")
        self.assertIsNone(find_entry(root, "missing"))


if __name__ == "__main__":
    unittest.main()
