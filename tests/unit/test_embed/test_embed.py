"""Tests for the widget embed tags."""

from __future__ import annotations

from envolvechat.domain.models import SignedCommand
from envolvechat.embed import WIDGET_LOADER_URL, escape_js_string, render_embed_tags

DIGEST = "0123456789abcdef0123456789abcdef01234567"


class TestRenderEmbedTags:
    def test_exact_template(self) -> None:
        command = SignedCommand(digest=DIGEST, canonical="none;2024;0;15;v=0.1,c=logout")
        html = render_embed_tags("123", command)
        assert html == (
            "\n"
            '<script type="text/javascript">\n'
            "    envoSn=123;\n"
            f'    env_commandString="{DIGEST};none;2024;0;15;v=0.1,c=logout";\n'
            "</script>\n"
            '<script type="text/javascript" src="http://d.envolve.com/env.nocache.js"></script>\n'
            "    "
        )

    def test_loader_url(self) -> None:
        assert WIDGET_LOADER_URL == "http://d.envolve.com/env.nocache.js"

    def test_accepts_plain_string(self) -> None:
        html = render_embed_tags("9", "abc;def")
        assert 'env_commandString="abc;def";' in html
        assert "envoSn=9;" in html

    def test_no_escaping_by_default(self) -> None:
        html = render_embed_tags("9", 'a"b\\c')
        assert 'env_commandString="a"b\\c";' in html

    def test_opt_in_escaping(self) -> None:
        html = render_embed_tags("9", 'a"b\\c', escape=True)
        assert 'env_commandString="a\\"b\\\\c";' in html


class TestEscapeJsString:
    def test_backslash_escaped_before_quote(self) -> None:
        assert escape_js_string('\\"') == '\\\\\\"'

    def test_plain_text_unchanged(self) -> None:
        assert escape_js_string("abc;v=0.1,c=login") == "abc;v=0.1,c=login"
