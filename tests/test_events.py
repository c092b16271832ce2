import pytest
from pydantic import ValidationError
from gazesmoothkit.runtime.events import Device, Sample, State, StateFlag, parse_message
from gazesmoothkit.runtime.client import GazeClient
from gazesmoothkit.io.simulator import simulate, scripted_path, random_targets

def test_parse_sample():
    m = parse_message('{"type":"sample","ts":10,"x":1.5,"y":2,"p":4,"ec":{"xl":1,"yl":2,"xr":3,"yr":4}}')
    assert isinstance(m, Sample)
    assert (m.ts, m.x, m.y, m.p, m.ec.xr) == (10, 1.5, 2.0, 4.0, 3.0)

def test_parse_state_and_device():
    s = parse_message('{"type":"state","value":5}')
    assert s.is_connected and s.is_tracking
    assert not s.is_calibrated and not s.is_busy
    assert not State().is_connected
    d = parse_message('{"type":"device","name":"Tobii 4C"}')
    assert isinstance(d, Device) and d.name == "Tobii 4C"

def test_unconsumed_types_are_ignored():
    assert parse_message('{"type":"custom","value":"x"}') is None
    assert parse_message('{"ts":1}') is None

@pytest.mark.parametrize("text", ["not json", "[1,2]", '{"type":"sample","ts":"soon"}'])
def test_malformed_messages(text):
    with pytest.raises(ValidationError):
        parse_message(text)

def test_simulated_session():
    msgs = list(simulate([(1, 2), (3, 4)]))
    assert [m.type for m in msgs] == ["device", "state", "state", "sample", "sample", "state"]
    assert [m.ts for m in msgs if isinstance(m, Sample)] == [33, 66]
    assert msgs[2].value == StateFlag.CONNECTED | StateFlag.CALIBRATED | StateFlag.TRACKING

def test_scripted_path_is_reproducible():
    targets = random_targets(3, seed=7)
    a = scripted_path(targets, 10, noise=4.0, seed=1)
    assert len(a) == 30 and a == scripted_path(targets, 10, noise=4.0, seed=1)
    assert scripted_path([(5, 5)], 3, noise=0) == [(5.0, 5.0)]*3

def test_client_follows_session():
    client = GazeClient()
    out = [client.handle(m.model_dump_json()) for m in simulate([(500, 500)]*10)]
    assert client.device_name == "Simulator"
    assert not client.is_tracking
    assert client.last_sample.ts == 330
    assert client.smoother.buffer_full
    assert client.location.x == pytest.approx(500.0)
    assert sum(p is not None for p in out) == 10

def test_client_resets_when_tracking_starts():
    client = GazeClient()
    for m in simulate([(500, 500)]*10):
        client.handle(m)
    assert client.smoother.interval == 33
    client.handle(State(value=int(StateFlag.CONNECTED | StateFlag.TRACKING)))
    assert client.is_tracking
    assert client.smoother.current is None and client.smoother.interval == 0
    assert client.handle(Device(name="other")) is None
