"""Shared fixtures for krelay-gamedata tests."""

import logging
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Iterator

import pytest

OBJECTS_XML = """<?xml version="1.0" encoding="utf-8"?>
<Objects>
  <Object type="0x0500" id="Pirate">
    <Class>Character</Class>
    <Enemy/>
    <MaxHitPoints>20</MaxHitPoints>
    <Projectile id="0">
      <ObjectId>Blade</ObjectId>
      <Speed>60</Speed>
      <Damage>5</Damage>
      <LifetimeMS>500</LifetimeMS>
    </Projectile>
  </Object>
  <Object type="0x0a00" id="Short Sword">
    <Class>Equipment</Class>
    <Item/>
    <SlotType>1</SlotType>
    <Tier>0</Tier>
    <Projectile id="0">
      <ObjectId>Blade</ObjectId>
      <MinDamage>15</MinDamage>
      <MaxDamage>25</MaxDamage>
    </Projectile>
  </Object>
  <Object type="0x0a16" id="Health Potion">
    <Class>Equipment</Class>
    <Item/>
    <SlotType>10</SlotType>
    <Consumable/>
    <Potion/>
    <Usable/>
  </Object>
</Objects>
"""

TILES_XML = """<?xml version="1.0" encoding="utf-8"?>
<GroundTypes>
  <Ground type="0x0024" id="Light Grass"/>
  <Ground type="0x0049" id="Dark Water">
    <NoWalk/>
    <Sink/>
  </Ground>
  <Ground type="0x004a" id="Lava">
    <MinDamage>50</MinDamage>
    <MaxDamage>100</MaxDamage>
    <Speed>0.5</Speed>
  </Ground>
</GroundTypes>
"""

PACKETS_XML = """<?xml version="1.0" encoding="utf-8"?>
<Packets>
  <Packet><PacketName>FAILURE</PacketName><PacketID>0</PacketID></Packet>
  <Packet><PacketName>NEWTICK</PacketName><PacketID>9</PacketID></Packet>
  <Packet><PacketName>UNKNOWN</PacketName><PacketID>255</PacketID></Packet>
</Packets>
"""

CHAR_LIST_XML = """<?xml version="1.0" encoding="utf-8"?>
<Chars nextCharId="2" maxNumChars="1">
  <Servers>
    <Server>
      <Name>USWest</Name>
      <DNS>54.241.208.233</DNS>
      <Lat>37.77</Lat>
      <Long>-122.42</Long>
      <Usage>0.27</Usage>
      <AdminOnly>false</AdminOnly>
    </Server>
    <Server>
      <Name>EUSouthWest</Name>
      <DNS>52.49.70.101</DNS>
      <Lat>48.85</Lat>
      <Long>2.35</Long>
      <Usage>0.8</Usage>
      <AdminOnly>false</AdminOnly>
    </Server>
    <Server>
      <Name>Australia</Name>
      <DNS>54.252.165.65</DNS>
      <Lat>-33.86</Lat>
      <Long>151.2</Long>
      <Usage>1.0</Usage>
      <AdminOnly>true</AdminOnly>
    </Server>
  </Servers>
</Chars>
"""

ERROR_XML = "<Error>Internal error, please wait 5 minutes to try again!</Error>"


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging() in a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    """Directory with valid operator copies of every bundled document."""
    directory = tmp_path / "Resources"
    directory.mkdir()
    (directory / "Objects.xml").write_text(OBJECTS_XML, encoding="utf-8")
    (directory / "Tiles.xml").write_text(TILES_XML, encoding="utf-8")
    (directory / "Packets.xml").write_text(PACKETS_XML, encoding="utf-8")
    return directory


@pytest.fixture
def app_settings(tmp_path: Path):
    """AppSettings backed by a throwaway INI file."""
    from krelay_gamedata.settings import AppSettings

    return AppSettings(settings_file=tmp_path / "settings.ini")


class _CharListHandler(BaseHTTPRequestHandler):
    server: "CharListServer"

    def do_GET(self) -> None:
        if self.server.delay:
            time.sleep(self.server.delay)
        self.server.requests += 1
        try:
            self.send_response(self.server.status)
            self.send_header("Content-Type", "text/xml")
            self.send_header("Content-Length", str(len(self.server.body)))
            self.end_headers()
            self.wfile.write(self.server.body)
        except (BrokenPipeError, ConnectionResetError):
            # Client gave up (timeout tests)
            pass

    def log_message(self, format: str, *args: object) -> None:
        pass


class CharListServer(ThreadingHTTPServer):
    """Local stand-in for the server list endpoint."""

    daemon_threads = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), _CharListHandler)
        self.body: bytes = CHAR_LIST_XML.encode("utf-8")
        self.status = 200
        self.delay = 0.0
        self.requests = 0

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.server_address[1]}/char/list"


@pytest.fixture
def char_list_server() -> Iterator[CharListServer]:
    server = CharListServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def unreachable_url() -> str:
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/char/list"


@pytest.fixture(
    params=[
        b'<?xml version="1.0" encoding="utf-8"?><Packets><Packet>',
        b'<?xml version="1.0" encoding="utf-8"?><Packets>\xff\xfe</Packets>',
        b'<?xml version="1.0" encoding="bogus-enc"?><Packets/>',
    ],
    ids=["truncated", "invalid-utf8", "unknown-encoding"],
)
def corrupt_payload(request: pytest.FixtureRequest) -> bytes:
    """Payloads that cannot be parsed as XML, each failing differently."""
    return request.param


@pytest.fixture
def documents() -> dict[str, str]:
    """Sample documents keyed by file name."""
    return {
        "Objects.xml": OBJECTS_XML,
        "Tiles.xml": TILES_XML,
        "Packets.xml": PACKETS_XML,
        "char_list.xml": CHAR_LIST_XML,
        "error.xml": ERROR_XML,
    }
