"""Tests for S-expression helper functions."""

from __future__ import annotations

from easyeda_kicad.utils.sexp import is_balanced, quote

SAMPLE_FOOTPRINT = """\
(footprint "R_0603" (version 20221018) (generator easyeda2kicad)
  (layer "F.Cu")
  (attr smd)
  (fp_text reference "REF**" (at 0 -1.5) (layer "F.SilkS")
    (effects (font (size 1 1) (thickness 0.15)))
  )
  (pad "1" smd rect (at -0.8 0) (size 0.8 0.9) (layers "F.Cu" "F.Paste" "F.Mask"))
  (pad "2" smd rect (at 0.8 0) (size 0.8 0.9) (layers "F.Cu" "F.Paste" "F.Mask"))
)
"""


class TestQuote:
    def test_plain(self):
        assert quote("R1") == '"R1"'

    def test_escapes(self):
        assert quote('a"b') == '"a\\"b"'
        assert quote("a\\b") == '"a\\\\b"'
        assert quote("a\nb") == '"a\\nb"'

    def test_non_string(self):
        assert quote(12) == '"12"'

    def test_quoted_text_reads_back(self, read_sexp):
        tree = read_sexp(f"(text {quote('say (hi) ' + chr(34) + 'there' + chr(34))})")
        assert tree == ["text", 'say (hi) "there"']

    def test_quoted_number_stays_string(self, read_sexp):
        tree = read_sexp(f"(pad {quote('1')} (at 1 2.5))")
        assert tree == ["pad", "1", ["at", 1, 2.5]]


class TestIsBalanced:
    def test_balanced(self, read_sexp, sexp_children):
        assert is_balanced(SAMPLE_FOOTPRINT)
        assert is_balanced("")
        pads = sexp_children(read_sexp(SAMPLE_FOOTPRINT), "pad")
        assert [p[1] for p in pads] == ["1", "2"]

    def test_unbalanced(self):
        assert not is_balanced("(a (b)")
        assert not is_balanced("(a))(")

    def test_parens_inside_strings_ignored(self):
        assert is_balanced('(text "(((")')
        assert is_balanced('(text "a \\" )")')
