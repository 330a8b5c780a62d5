#!/usr/bin/env python3
"""
web_remote.py  –  web UI + remote control for the A/B comparator

Endpoints
---------
/               → HTML page with buttons and the live status text
/status         → JSON array of status lines
/action?cmd=…   → inject control commands
                  (toggle, first, second, mark, status, hold_down, hold_up,
                   pause, quit)
/crash          → traceback of the last server crash (empty if none)
"""

from __future__ import annotations
import http.server
import socketserver
import threading
import urllib.parse
import json
import time
import traceback
from typing import TYPE_CHECKING, Any

from events import EventManager, Action
import config

if TYPE_CHECKING:                       # avoid circular import at runtime
    from app import ABCompare

# ── command → action ───────────────────────────────────────────────────────
_KEY_COMMANDS = {
    "toggle":    ("toggle", "press"),
    "first":     ("first", "press"),
    "second":    ("second", "press"),
    "mark":      ("mark", "press"),
    "status":    ("status", "press"),
    "hold_down": ("hold", "down"),
    "hold_up":   ("hold", "up"),
}

last_http_crash = ""


def action_for(cmd: str) -> Action | None:
    if cmd in _KEY_COMMANDS:
        command, phase = _KEY_COMMANDS[cmd]
        return {"type": "key", "command": command, "phase": phase}
    if cmd == "pause":
        return {"type": "pause"}
    if cmd == "quit":
        return {"type": "quit"}
    return None


# ── reusable threaded HTTP server ──────────────────────────────────────────
class ReusableTCPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads      = True
    allow_reuse_address = True


# ── request handler ────────────────────────────────────────────────────────
class RemoteHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, *args):
        return  # silence default logging

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        path, qs = parsed.path, parsed.query

        if path == "/":
            return self._serve_html()
        if path == "/status":
            return self._serve_json(self.server.ab.status_lines())   # type: ignore
        if path == "/crash":
            return self._serve_json(last_http_crash)
        if path == "/action":
            return self._serve_action(qs)

        self.send_error(404, "Not found")

    # ── helpers for each route ───────────────────────────────────────────
    def _serve_html(self):
        b = HTML_PAGE.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_json(self, obj: Any):
        b = json.dumps(obj).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_action(self, query: str):
        qs = urllib.parse.parse_qs(query)
        act = action_for(qs.get("cmd", [""])[0])
        if act is None:
            return self.send_error(400, "Unknown cmd")

        EventManager.post(act)
        self.send_response(204)
        self.end_headers()


# ── simple HTML UI ─────────────────────────────────────────────────────────
HTML_PAGE = """
<!doctype html><html><head><meta charset="utf-8">
<title>A/B Remote</title>
<style>
 body{background:#000;color:#0f0;font-family:monospace;padding:1em;}
 button{margin:4px;padding:6px 12px;border:1px solid #0f0;
        background:#000;color:#0f0;font-family:monospace;}
 pre{margin:0.5em 0;font-family:monospace;}
</style></head><body>
<h2>A/B Remote</h2>
<button onclick="send('toggle')">Toggle</button>
<button onclick="send('first')">1</button>
<button onclick="send('second')">2</button>
<button onclick="send('mark')">Mark sync</button>
<button onclick="send('status')">Status</button>
<button onmousedown="send('hold_down')" onmouseup="send('hold_up')">Hold to preview</button>
<button onclick="send('pause')">Pause</button>
<button onclick="send('quit')">Quit</button>

<div><h3>Status</h3><pre id="status"></pre></div>

<script>
 function send(cmd){ fetch('/action?cmd=' + cmd); }
 async function refreshUI(){
   try {
     let r = await fetch('/status'); let lines = await r.json();
     document.getElementById('status').textContent = lines.join('\\n');
   } catch(e){
     console.error(e);
   }
 }
 setInterval(refreshUI, 500);
 refreshUI();
</script>
</body></html>
"""


# ── server bootstrap with auto-restart ────────────────────────────────────
def start(ab: "ABCompare", port: int = getattr(config, "WEB_PORT", 8080)):
    def _serve_loop():
        global last_http_crash
        while True:
            try:
                with ReusableTCPServer(("", port), RemoteHandler) as httpd:
                    httpd.ab = ab
                    httpd.serve_forever()
            except Exception:
                last_http_crash = traceback.format_exc()
                print(f"[web_remote] server crashed, restarting:\n{last_http_crash}")
                time.sleep(1)

    threading.Thread(target=_serve_loop, daemon=True).start()
    print(f"[web_remote] listening on port {port}")
