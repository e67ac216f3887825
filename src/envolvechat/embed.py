"""HTML tags that bootstrap the Envolve widget.

The variable names ``envoSn`` and ``env_commandString`` and the loader
URL are read by Envolve's own JavaScript and must not change. The
template text, whitespace included, matches what existing pages embed.
"""

from __future__ import annotations

from envolvechat.domain.models import SignedCommand

WIDGET_LOADER_URL = "http://d.envolve.com/env.nocache.js"

EMBED_TEMPLATE = (
    "\n"
    '<script type="text/javascript">\n'
    "    envoSn={site_id};\n"
    '    env_commandString="{command}";\n'
    "</script>\n"
    '<script type="text/javascript" src="' + WIDGET_LOADER_URL + '"></script>\n'
    "    "
)


def escape_js_string(text: str) -> str:
    """Backslash-escape ``\\`` and ``"`` for a double-quoted JS string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def render_embed_tags(site_id: str, command: SignedCommand | str, escape: bool = False) -> str:
    """Render the two ``<script>`` tags for a site and signed command.

    The command is inserted verbatim unless ``escape`` is set. Names
    containing ``"`` will then break out of the string literal, which is
    how existing integrations behave.
    """
    text = str(command)
    if escape:
        text = escape_js_string(text)
    return EMBED_TEMPLATE.format(site_id=site_id, command=text)
