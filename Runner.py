from collections import namedtuple

from datacenter import CONSOLIDATION_THRESHOLD, CONSOLIDATION_TASK_CEILING
from schedule import SchedulerVM, SimulationState

Summary = namedtuple('Summary',
                     ['total_tasks', 'baseline_energy', 'total_energy', 'energy_saved', 'efficiency'])

SimulationResult = namedtuple('SimulationResult',
                              ['final_vm_states', 'summary', 'events', 'consolidated_vm_ids'])


def run_simulation(vms, tasks, policy="first_fit",
                   consolidation_threshold=CONSOLIDATION_THRESHOLD,
                   task_count_ceiling=CONSOLIDATION_TASK_CEILING):
    """
    Consolidate once, then schedule every task in generation order.

    :param vms: list of VM objects, mutated in place
    :param tasks: iterable of Task records
    :param policy: placement policy passed to SchedulerVM
    :return: SimulationResult with the final VMs, Summary and per-task events
    """
    state = SimulationState(vms)
    scheduler = SchedulerVM(state, policy=policy)

    turned_off = state.vm_pool.consolidate(threshold=consolidation_threshold,
                                           task_count_ceiling=task_count_ceiling)
    events = scheduler.schedule_all(tasks)

    summary = summarize(state.vm_pool, scheduler.get_baseline_energy())
    return SimulationResult(
        final_vm_states=list(state.vm_pool),
        summary=summary,
        events=events,
        consolidated_vm_ids=[vm.vm_id for vm in turned_off],
    )


def summarize(vms, baseline_energy_total):
    # Sleeping VMs are left out of both sums.
    total_tasks = 0
    total_energy = 0.0
    for vm in vms:
        if vm.asleep:
            continue
        total_tasks += vm.task_count
        total_energy += vm.energy_used

    energy_saved = baseline_energy_total - total_energy
    efficiency = calculate_power_efficiency(energy_saved, total_tasks)
    return Summary(total_tasks, baseline_energy_total, total_energy, energy_saved, efficiency)


def calculate_power_efficiency(energy_saved, total_tasks):
    """
    Energy saved per scheduled task, or None when nothing was scheduled.
    """
    if total_tasks > 0:
        return energy_saved / total_tasks
    return None
