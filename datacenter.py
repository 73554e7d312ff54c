# datacenter.py

from collections import namedtuple
from enum import Enum

# DVFS tiers in GHz
DVFS_HIGH = 3.0
DVFS_MED = 2.5
DVFS_LOW = 1.8

# Utilization bounds (percent) for the default DVFS rule
HIGH_UTILIZATION = 80
LOW_UTILIZATION = 40

MAX_UTILIZATION = 100

CONSOLIDATION_THRESHOLD = 50
CONSOLIDATION_TASK_CEILING = 2


class Frequency(Enum):
    LOW = DVFS_LOW
    MED = DVFS_MED
    HIGH = DVFS_HIGH

    @property
    def ghz(self):
        return self.value


class VMState(Enum):
    ACTIVE = "active"
    IDLE = "idle"  # reserved, nothing transitions into it
    SLEEP = "sleep"


Task = namedtuple('Task', ['id', 'load', 'runtime'])


def select_frequency(utilization):
    """
    Default DVFS rule: map a utilization percentage to a frequency tier.
    Exactly 80 stays at MED and exactly 40 is already MED.
    """
    if utilization > HIGH_UTILIZATION:
        return Frequency.HIGH
    elif utilization < LOW_UTILIZATION:
        return Frequency.LOW
    else:
        return Frequency.MED


class VM:
    def __init__(self, vm_id, utilization=0, frequency=Frequency.MED,
                 energy_used=0.0, task_count=0, state=VMState.ACTIVE):
        """
        VM represents one virtual machine in the fixed pool.

        :param vm_id: Unique identifier, also the scan order during placement
        :param utilization: CPU utilization in percent [0, 100]
        :param frequency: Current DVFS tier
        :param energy_used: Energy charged to this VM so far, in kWh
        :param task_count: Number of tasks placed on this VM
        :param state: VMState
        """
        self.vm_id = vm_id
        self.utilization = utilization
        self.frequency = frequency
        self.energy_used = energy_used
        self.task_count = task_count
        self.state = state
        self.idle_counter = 0  # reserved for an idle-timeout policy that does not exist yet

    @property
    def active(self):
        return self.state == VMState.ACTIVE

    @property
    def asleep(self):
        return self.state == VMState.SLEEP

    def remaining_capacity(self):
        return MAX_UTILIZATION - self.utilization

    def can_host(self, task):
        return self.utilization + task.load <= MAX_UTILIZATION

    def adjust_frequency(self):
        """
        Re-evaluate the DVFS tier after a utilization change.
        """
        self.frequency = select_frequency(self.utilization)
        return self.frequency

    def sleep(self):
        # Utilization and energy are left untouched.
        self.state = VMState.SLEEP

    def wake(self):
        """
        Bring a sleeping VM back as a fresh, empty ACTIVE VM.
        """
        self.utilization = 0
        self.task_count = 0
        self.energy_used = 0.0
        self.frequency = Frequency.MED
        self.state = VMState.ACTIVE

    def to_dict(self):
        return {
            "vm_id": self.vm_id,
            "utilization": self.utilization,
            "frequency": self.frequency.ghz,
            "energy_used": self.energy_used,
            "task_count": self.task_count,
            "state": self.state.value,
        }

    def __str__(self):
        return (f"VM-{self.vm_id} | Util:{self.utilization}% | Freq:{self.frequency.ghz:.1f}GHz | "
                f"Tasks:{self.task_count} | Energy:{self.energy_used:.3f}kWh")


class VMPool:
    def __init__(self, vms):
        """
        Fixed-size collection of VMs, kept in ascending id order.

        :param vms: list of VM objects; the list itself is mutated in place
        """
        self.vms = vms

    def __iter__(self):
        return iter(self.vms)

    def __len__(self):
        return len(self.vms)

    def active_vms(self):
        return [vm for vm in self.vms if vm.active]

    def sleeping_vms(self):
        return [vm for vm in self.vms if vm.asleep]

    def consolidate(self, threshold=CONSOLIDATION_THRESHOLD,
                    task_count_ceiling=CONSOLIDATION_TASK_CEILING):
        """
        Put under-loaded ACTIVE VMs to sleep. Returns the VMs that were turned off.
        """
        turned_off = []
        for vm in self.vms:
            if vm.active and vm.utilization < threshold and vm.task_count < task_count_ceiling:
                vm.sleep()
                turned_off.append(vm)
        return turned_off

    def reactivate(self):
        """
        Wake the lowest-id sleeping VM. Returns None when no VM is asleep.
        """
        sleeping = self.sleeping_vms()
        if not sleeping:
            return None
        vm = sleeping[0]
        vm.wake()
        return vm
