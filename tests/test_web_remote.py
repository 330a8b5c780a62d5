import json
import threading
import urllib.error
import urllib.request

import pytest

import web_remote
from app import ABCompare
from conftest import FakeHost
from events import EventManager


@pytest.fixture
def server():
    ab = ABCompare(FakeHost(files=["a.mkv", "b.mkv"]))
    ab.dispatch({"type": "file_loaded"})
    httpd = web_remote.ReusableTCPServer(("127.0.0.1", 0), web_remote.RemoteHandler)
    httpd.ab = ab
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def test_action_for_known_and_unknown_commands():
    assert web_remote.action_for("hold_down") == {"type": "key", "command": "hold", "phase": "down"}
    assert web_remote.action_for("mark") == {"type": "key", "command": "mark", "phase": "press"}
    assert web_remote.action_for("quit") == {"type": "quit"}
    assert web_remote.action_for("rewind") is None


def test_status_endpoint(server):
    with urllib.request.urlopen(server + "/status") as resp:
        lines = json.load(resp)
    assert lines == ["A/B status:", "1: a.mkv  sync=unset  [ACTIVE]", "2: b.mkv  sync=unset"]


def test_action_endpoint_posts_to_queue(server):
    with urllib.request.urlopen(server + "/action?cmd=toggle") as resp:
        assert resp.status == 204
    assert EventManager.wait(1.0) == {"type": "key", "command": "toggle", "phase": "press"}


def test_bad_requests(server):
    with pytest.raises(urllib.error.HTTPError) as exc:
        urllib.request.urlopen(server + "/action?cmd=nope")
    assert exc.value.code == 400

    with pytest.raises(urllib.error.HTTPError) as exc:
        urllib.request.urlopen(server + "/missing")
    assert exc.value.code == 404
