import pytest

from datacenter import Frequency, VMState, VM, VMPool
from schedule import (SchedulerVM, SimulationState, Accumulator,
                      ASSIGNED, REACTIVATED, UNSCHEDULABLE)


def make_scheduler(vms, policy="first_fit"):
    return SchedulerVM(SimulationState(vms), policy=policy)


def test_assign_updates_vm_and_baseline(hour_task):
    vm = VM(0, utilization=0, frequency=Frequency.MED)
    scheduler = make_scheduler([vm])

    result = scheduler.assign(vm, hour_task(0, 10))

    assert result.accepted
    assert vm.utilization == 10
    assert vm.task_count == 1
    assert vm.frequency is Frequency.LOW
    assert result.frequency is Frequency.LOW
    assert result.energy == pytest.approx(0.18)
    assert vm.energy_used == pytest.approx(0.18)
    assert scheduler.get_baseline_energy() == pytest.approx(0.3)
    assert result.sla_compliant


def test_assign_fills_to_exactly_full(hour_task):
    vm = VM(0, utilization=85)
    scheduler = make_scheduler([vm])
    result = scheduler.assign(vm, hour_task(0, 15))
    assert result.accepted
    assert vm.utilization == 100
    assert vm.frequency is Frequency.HIGH


def test_assign_rejects_overflow_without_mutation(hour_task):
    vm = VM(0, utilization=96)
    scheduler = make_scheduler([vm])

    result = scheduler.assign(vm, hour_task(0, 5))

    assert not result.accepted
    assert result.energy is None
    assert vm.utilization == 96
    assert vm.task_count == 0
    assert vm.energy_used == 0.0
    assert scheduler.get_baseline_energy() == 0.0


def test_sla_violation_does_not_undo_assignment(monkeypatch, hour_task):
    monkeypatch.setattr("schedule.check_sla", lambda task, energy: False)
    vm = VM(0)
    scheduler = make_scheduler([vm])

    result = scheduler.assign(vm, hour_task(0, 10))

    assert result.accepted
    assert result.sla_compliant is False
    assert vm.task_count == 1
    assert vm.energy_used == pytest.approx(0.18)


def test_first_fit_picks_lowest_id_with_room(hour_task):
    vms = [VM(0, utilization=95), VM(1, utilization=60), VM(2, utilization=10)]
    scheduler = make_scheduler(vms)

    event = scheduler.schedule_task(hour_task(0, 10))

    assert event.outcome == ASSIGNED
    assert event.vm_id == 1
    assert vms[1].utilization == 70
    assert vms[2].utilization == 10


def test_first_fit_skips_sleeping_vms(hour_task):
    vms = [VM(0, utilization=10, state=VMState.SLEEP), VM(1, utilization=40)]
    scheduler = make_scheduler(vms)
    event = scheduler.schedule_task(hour_task(0, 10))
    assert event.vm_id == 1
    assert vms[0].state is VMState.SLEEP


def test_falls_back_to_reactivation(hour_task):
    vms = [VM(0, utilization=95), VM(1, utilization=45, state=VMState.SLEEP)]
    scheduler = make_scheduler(vms)

    event = scheduler.schedule_task(hour_task(0, 10))

    assert event.outcome == REACTIVATED
    assert event.vm_id == 1
    assert vms[1].state is VMState.ACTIVE
    assert vms[1].utilization == 10
    assert vms[1].task_count == 1
    assert event.frequency is Frequency.LOW


def test_unschedulable_when_no_room_and_no_sleeper(hour_task):
    vm = VM(0, utilization=96)
    scheduler = make_scheduler([vm])

    event = scheduler.schedule_task(hour_task(0, 5))

    assert event.outcome == UNSCHEDULABLE
    assert event.vm_id is None
    assert event.energy is None
    assert event.sla_compliant is None
    assert vm.utilization == 96
    assert scheduler.get_baseline_energy() == 0.0


def test_schedule_all_keeps_task_order_and_capacity(hour_task):
    vms = [VM(0, utilization=60), VM(1, utilization=30)]
    scheduler = make_scheduler(vms)
    tasks = [hour_task(i, 20) for i in range(6)]

    events = scheduler.schedule_all(tasks)

    assert [e.task_id for e in events] == list(range(6))
    assert [e.vm_id for e in events] == [0, 0, 1, 1, 1, None]
    assert events[-1].outcome == UNSCHEDULABLE
    assert all(vm.utilization <= 100 for vm in vms)
    assert scheduler.events == events


def test_best_fit_picks_tightest_vm(hour_task):
    vms = [VM(0, utilization=20), VM(1, utilization=80), VM(2, utilization=70)]
    scheduler = make_scheduler(vms, policy="best_fit")
    assert scheduler.schedule_task(hour_task(0, 15)).vm_id == 1


def test_worst_fit_picks_emptiest_vm(hour_task):
    vms = [VM(0, utilization=50), VM(1, utilization=20), VM(2, utilization=20)]
    scheduler = make_scheduler(vms, policy="worst_fit")
    assert scheduler.schedule_task(hour_task(0, 15)).vm_id == 1


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        make_scheduler([VM(0)], policy="round_robin")
    scheduler = make_scheduler([VM(0)])
    with pytest.raises(ValueError):
        scheduler.set_policy("random")
    assert scheduler.policy == "first_fit"


def test_simulation_state_wraps_list():
    state = SimulationState([VM(0)])
    assert isinstance(state.vm_pool, VMPool)
    assert isinstance(state.accumulator, Accumulator)
    assert state.accumulator.baseline_energy_total == 0.0
