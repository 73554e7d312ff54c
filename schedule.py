# schedule.py

from collections import namedtuple

from datacenter import VMPool
from energy_model import task_energy, baseline_energy, check_sla

ASSIGNED = "ASSIGNED"
REACTIVATED = "REACTIVATED"
UNSCHEDULABLE = "UNSCHEDULABLE"

POLICIES = ("first_fit", "best_fit", "worst_fit")

AssignmentResult = namedtuple('AssignmentResult',
                              ['vm_id', 'frequency', 'energy', 'sla_compliant', 'accepted'])

TaskEvent = namedtuple('TaskEvent',
                       ['task_id', 'vm_id', 'frequency', 'energy', 'sla_compliant', 'outcome'])


class Accumulator:
    def __init__(self):
        self.baseline_energy_total = 0.0


class SimulationState:
    def __init__(self, vm_pool, accumulator=None):
        """
        Everything a scheduling run mutates.

        :param vm_pool: VMPool (or a plain list of VMs, wrapped automatically)
        :param accumulator: Accumulator holding the baseline energy running sum
        """
        if not isinstance(vm_pool, VMPool):
            vm_pool = VMPool(vm_pool)
        self.vm_pool = vm_pool
        self.accumulator = accumulator if accumulator is not None else Accumulator()


class SchedulerVM:
    def __init__(self, state, policy="first_fit"):
        """
        Scheduler to place tasks on VMs based on a given policy.

        :param state: SimulationState owned by this scheduler for the run
        :param policy: placement strategy ("first_fit", "best_fit", "worst_fit")
        """
        self.state = state
        self.policy = None
        self.set_policy(policy)
        self.events = []

    @property
    def vm_pool(self):
        return self.state.vm_pool

    @property
    def accumulator(self):
        return self.state.accumulator

    def assign(self, vm, task):
        """
        Commit `task` to `vm`: raise utilization, re-run DVFS, charge energy and
        add the baseline cost. A VM without room is left untouched and a
        rejected result is returned.
        """
        if not vm.can_host(task):
            return AssignmentResult(vm.vm_id, None, None, None, False)

        vm.utilization += task.load
        vm.task_count += 1
        frequency = vm.adjust_frequency()

        energy = task_energy(task.runtime, frequency)
        vm.energy_used += energy
        self.accumulator.baseline_energy_total += baseline_energy(task.runtime)

        # SLA is only observed, the assignment above already stands.
        compliant = check_sla(task, energy)
        return AssignmentResult(vm.vm_id, frequency, energy, compliant, True)

    def schedule_task(self, task):
        """
        Place one task: policy choice among ACTIVE VMs, else reactivation, else
        the task is recorded as unschedulable. Returns the TaskEvent.
        """
        outcome = ASSIGNED
        candidate_vm = self._select_vm(task)
        if candidate_vm is None:
            candidate_vm = self.vm_pool.reactivate()
            outcome = REACTIVATED

        if candidate_vm is None:
            event = TaskEvent(task.id, None, None, None, None, UNSCHEDULABLE)
        else:
            result = self.assign(candidate_vm, task)
            if result.accepted:
                event = TaskEvent(task.id, result.vm_id, result.frequency,
                                  result.energy, result.sla_compliant, outcome)
            else:
                event = TaskEvent(task.id, None, None, None, None, UNSCHEDULABLE)

        self.events.append(event)
        return event

    def schedule_all(self, tasks):
        return [self.schedule_task(task) for task in tasks]

    def _select_vm(self, task):
        """
        Internal method to select a VM based on policy.
        """
        if self.policy == "first_fit":
            return self._first_fit(task)
        elif self.policy == "best_fit":
            return self._best_fit(task)
        elif self.policy == "worst_fit":
            return self._worst_fit(task)
        else:
            raise ValueError(f"Unknown scheduling policy: {self.policy}")

    def _candidates(self, task):
        return [vm for vm in self.vm_pool.active_vms() if vm.can_host(task)]

    def _first_fit(self, task):
        for vm in self.vm_pool.active_vms():
            if vm.can_host(task):
                return vm
        return None

    def _best_fit(self, task):
        candidates = self._candidates(task)
        if not candidates:
            return None
        return min(candidates, key=lambda vm: (vm.remaining_capacity() - task.load, vm.vm_id))

    def _worst_fit(self, task):
        candidates = self._candidates(task)
        if not candidates:
            return None
        return max(candidates, key=lambda vm: (vm.remaining_capacity() - task.load, -vm.vm_id))

    def set_policy(self, policy):
        if policy not in POLICIES:
            raise ValueError(f"Unknown scheduling policy: {policy}")
        self.policy = policy

    def get_baseline_energy(self):
        return self.accumulator.baseline_energy_total
