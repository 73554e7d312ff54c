import matplotlib

matplotlib.use("Agg")

import pytest

from datacenter import VM, Task, VMState


@pytest.fixture
def make_vm():
    def _make(vm_id, utilization=0, task_count=0, state=VMState.ACTIVE):
        return VM(vm_id, utilization=utilization, task_count=task_count, state=state)
    return _make


@pytest.fixture
def hour_task():
    # One-hour task, so energy equals frequency * 0.1
    def _make(task_id, load):
        return Task(id=task_id, load=load, runtime=3600)
    return _make
