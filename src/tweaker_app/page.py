# SPDX-License-Identifier: MIT

"""
Full-page rendering for the editing UI.

The page is a single self-contained document: one section per namespace,
one row per tunable, and a small script that posts edits to /set/<kind> and
polls /should_refresh for newly registered tunables.
"""

from __future__ import annotations

import html
import json
from typing import Any, List, Sequence, Tuple

from tweaker_library.config.defaults import DEFAULT_POLL_INTERVAL_MS
from tweaker_library.fields import Field, Kind
from tweaker_library.view import NamespaceGroup, label_for

PAGE_TITLE = "Const Tweaker"

CLIENT_SCRIPT = """
function send(key, labelId, value, kind) {
	var label = document.getElementById(labelId);
	if (label) {
		label.textContent = value;
	}

	fetch('/set/' + kind, {
		method: 'POST',
		headers: {'Content-Type': 'application/json'},
		body: JSON.stringify({key: key, value: value})
	}).then(response => {
		if (!response.ok) {
			return response.text().then(body => {
				setStatus('Update of ' + key + ' failed (' + response.status + '): ' + body);
			});
		}
		setStatus('');
	}).catch(err => {
		setStatus('HTTP Error: ' + err);
	});
}

function setStatus(text) {
	var status = document.getElementById('status');
	status.textContent = text;
	status.style.display = text ? 'block' : 'none';
}

function poll() {
	fetch('/should_refresh')
		.then(response => response.text())
		.then(body => {
			if (body == 'refresh') {
				location.reload();
			}
		})
		.catch(err => {
			setStatus('HTTP Error: ' + err);
		});
}

setInterval(poll, __POLL_INTERVAL__);
"""

PAGE_STYLE = """
body { font-family: sans-serif; margin: 2em; background: #fafafa; color: #222; }
h1 { font-size: 1.4em; }
section { background: #fff; border: 1px solid #ddd; border-radius: 6px; padding: 0.5em 1em; margin-bottom: 1em; }
h2 { font-size: 1.1em; font-family: monospace; }
table { width: 100%; border-collapse: collapse; }
td { padding: 0.3em 0.5em; vertical-align: middle; }
td.name { font-family: monospace; width: 25%; }
td.location { color: #888; font-size: 0.8em; width: 20%; }
td.control input[type=range], td.control input[type=text] { width: 100%; }
td.value { font-family: monospace; width: 15%; }
#status { display: none; background: #fdd; border: 1px solid #c66; padding: 0.5em; margin-bottom: 1em; }
"""


def _attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _js_arg(value: Any) -> str:
    # JSON literal, escaped for use inside a double-quoted attribute
    return html.escape(json.dumps(value), quote=True)


def render_control(key: str, field: Field, control_id: str) -> str:
    label_id = f"{control_id}_label"
    kind = field.kind
    send_prefix = f"send({_js_arg(key)}, {_js_arg(label_id)}, "
    kind_arg = _js_arg(kind.value)

    if kind.is_numeric:
        if kind.is_float:
            parsed = "parseFloat(this.value)"
        else:
            # Range values may come back in exponent notation
            parsed = "Math.round(Number(this.value))"
        handler = f"{send_prefix}{parsed}, {kind_arg})"
        return (
            f'<input type="range" id="{control_id}" '
            f'min="{_attr(field.min)}" '
            f'max="{_attr(field.max)}" '
            f'step="{_attr(field.step)}" '
            f'value="{_attr(field.value)}" '
            f'oninput="{handler}">'
        )

    if kind is Kind.BOOL:
        checked = " checked" if field.value else ""
        handler = f"{send_prefix}this.checked, {kind_arg})"
        return (
            f'<input type="checkbox" id="{control_id}"{checked} '
            f'onchange="{handler}">'
        )

    handler = f"{send_prefix}this.value, {kind_arg})"
    return (
        f'<input type="text" id="{control_id}" value="{_attr(field.value)}" '
        f'oninput="{handler}">'
    )


def _display_value(field: Field) -> str:
    if field.kind is Kind.BOOL:
        return "true" if field.value else "false"
    return str(field.value)


def render_group(group: NamespaceGroup, start_index: int) -> Tuple[str, int]:
    rows: List[str] = []
    index = start_index
    for key, field in group.entries:
        control_id = f"tweak_{index}"
        index += 1
        rows.append(
            "<tr>"
            f'<td class="name" title="{_attr(key)}">{html.escape(label_for(key))}</td>'
            f'<td class="location">{html.escape(field.file)}:{field.line}</td>'
            f'<td class="control">{render_control(key, field, control_id)}</td>'
            f'<td class="value" id="{control_id}_label">{html.escape(_display_value(field))}</td>'
            "</tr>"
        )
    section = (
        "<section>"
        f"<h2>{html.escape(group.namespace or '(no namespace)')}</h2>"
        f"<table>{''.join(rows)}</table>"
        "</section>"
    )
    return section, index


def render_page(
    groups: Sequence[NamespaceGroup],
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> str:
    """Render the grouped view into the editing page."""
    sections: List[str] = []
    index = 0
    for group in groups:
        section, index = render_group(group, index)
        sections.append(section)

    if not sections:
        sections.append("<p>No tunables registered yet.</p>")

    script = CLIENT_SCRIPT.replace("__POLL_INTERVAL__", str(int(poll_interval_ms)))
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{PAGE_TITLE}</title>\n"
        f"<style>{PAGE_STYLE}</style>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{PAGE_TITLE}</h1>\n"
        '<div id="status"></div>\n'
        + "\n".join(sections)
        + f"\n<script>{script}</script>\n"
        "</body>\n"
        "</html>\n"
    )
