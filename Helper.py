# Helper.py

import numpy as np

from datacenter import VM, Task, Frequency

# ====================
# Simulation Configuration
# ====================
MAX_VMS = 5
MAX_TASKS = 20

# ====================
# VM Configuration
# ====================
VM_UTIL_MIN = 30
VM_UTIL_MAX = 70  # exclusive

# ====================
# Task Configuration
# ====================
TASK_LOAD_MIN = 5
TASK_LOAD_MAX = 20  # inclusive
TASK_RUNTIME_MIN = 60
TASK_RUNTIME_MAX = 600  # exclusive, seconds

WORKLOAD_LEVELS = ["low", "medium", "high"]


def make_rng(seed=None):
    """
    Return a numpy Generator. An existing Generator is passed through unchanged
    so that several factories can share one stream.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def create_vm_list(num_vms, seed=None):
    if num_vms < 0:
        raise ValueError(f"Number of VMs must be non-negative, got {num_vms}")
    rng = make_rng(seed)
    vm_list = []
    for i in range(num_vms):
        utilization = int(rng.integers(VM_UTIL_MIN, VM_UTIL_MAX))
        vm_list.append(VM(i, utilization=utilization, frequency=Frequency.MED))
    return vm_list


def create_task_list(num_tasks, seed=None):
    """
    Generate tasks with load in [5, 20] percent and runtime in [60, 600) seconds.
    """
    if num_tasks < 0:
        raise ValueError(f"Number of tasks must be non-negative, got {num_tasks}")
    rng = make_rng(seed)
    task_list = []
    for i in range(num_tasks):
        load = int(rng.integers(TASK_LOAD_MIN, TASK_LOAD_MAX + 1))
        runtime = int(rng.integers(TASK_RUNTIME_MIN, TASK_RUNTIME_MAX))
        task_list.append(Task(id=i, load=load, runtime=runtime))
    return task_list


def predict_workload(seed=None):
    # Advisory only, placement never reads it.
    rng = make_rng(seed)
    return WORKLOAD_LEVELS[int(rng.integers(0, len(WORKLOAD_LEVELS)))]
