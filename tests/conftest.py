import pytest

from ua_testserver.core.models import RuntimeConfig


class RecordingRuntime:
    """
    ServerRuntime fake that records every call in order.

    fail_on names a method that raises RuntimeError instead of succeeding,
    on its fail_at-th call (1 is the first).
    """

    def __init__(self, fail_on=None, fail_at=1):
        self.fail_on = fail_on
        self.fail_at = fail_at
        self.calls = []
        self.handle = object()

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name == self.fail_on and self.names().count(name) == self.fail_at:
            raise RuntimeError(f"{name} failed")

    def names(self):
        return [c[0] for c in self.calls]

    def set_minimal_config(self, port):
        self._record("set_minimal_config", port)
        return RuntimeConfig(port=port)

    def new_server(self, config):
        self._record("new_server", config)
        return self.handle

    def write_variable(self, handle, node_id, value):
        self._record("write_variable", handle, node_id, value)

    def add_namespace(self, handle, uri):
        self._record("add_namespace", handle, uri)
        return 2

    def run(self, handle):
        self._record("run", handle)

    def destroy(self, handle):
        self._record("destroy", handle)


@pytest.fixture
def runtime():
    return RecordingRuntime()


@pytest.fixture
def make_runtime():
    def make(fail_on=None, fail_at=1):
        return RecordingRuntime(fail_on=fail_on, fail_at=fail_at)
    return make


@pytest.fixture
def full_args():
    return ["-au", "urn:t", "-an", "srv", "-c", "cap1:cap2", "-p", "4840", "-d", "ON"]
