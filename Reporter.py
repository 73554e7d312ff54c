import os
import sys

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from schedule import REACTIVATED, UNSCHEDULABLE

_saved_stdout = None


def block_print():
    global _saved_stdout
    if _saved_stdout is not None:
        return
    _saved_stdout = sys.stdout
    sys.stdout = open(os.devnull, "w")


def enable_print():
    global _saved_stdout
    if _saved_stdout is None:
        return
    sys.stdout.close()
    sys.stdout = _saved_stdout
    _saved_stdout = None


# ====================
# Console output
# ====================
def print_consolidation(consolidated_vm_ids):
    print("\n Consolidation Phase:")
    for vm_id in consolidated_vm_ids:
        print(f"  VM-{vm_id} turned OFF due to underutilization")


def print_schedule(tasks, events):
    print("\n Task Scheduling:")
    loads = {task.id: task.load for task in tasks}
    for event in events:
        if event.outcome == UNSCHEDULABLE:
            print(f"  Task-{event.task_id} could not be scheduled")
            continue
        if event.outcome == REACTIVATED:
            print(f"  Reactivated VM-{event.vm_id} for Task-{event.task_id}")
        print(f" Task-{event.task_id} -> VM-{event.vm_id} | Load:{loads[event.task_id]}% | "
              f"Freq:{event.frequency.ghz:.1f}GHz | Energy:{event.energy:.3f}kWh")
        if not event.sla_compliant:
            print(f"  SLA Warning: Task-{event.task_id} may miss deadline")


def print_vm_status(vms):
    print("\n VM STATUS:")
    for vm in vms:
        if vm.asleep:
            continue
        print(f"  {vm}")


def print_summary(summary):
    print("\n SIMULATION SUMMARY:")
    print(f"  Tasks Scheduled: {summary.total_tasks}")
    print(f"  Baseline Energy: {summary.baseline_energy:.3f} kWh")
    print(f"  Actual Energy:   {summary.total_energy:.3f} kWh")
    print(f"  Energy Saved:    {summary.energy_saved:.3f} kWh")
    if summary.efficiency is not None:
        print(f"  Efficiency:      {summary.efficiency:.4f} kWh/task")
    if summary.energy_saved < 0:
        print("  Warning: DVFS schedule used more energy than the fixed-frequency baseline")


def print_report(tasks, result, predicted_workload=None):
    if predicted_workload is not None:
        print(f"\n Predicted Workload: {predicted_workload}")
    print_consolidation(result.consolidated_vm_ids)
    print_schedule(tasks, result.events)
    print_vm_status(result.final_vm_states)
    print_summary(result.summary)


# ====================
# Tables and export
# ====================
def events_to_frame(events):
    rows = []
    for event in events:
        row = event._asdict()
        row["frequency"] = event.frequency.ghz if event.frequency is not None else None
        rows.append(row)
    return pd.DataFrame(rows, columns=["task_id", "vm_id", "frequency", "energy",
                                       "sla_compliant", "outcome"])


def vms_to_frame(vms):
    return pd.DataFrame([vm.to_dict() for vm in vms],
                        columns=["vm_id", "utilization", "frequency", "energy_used",
                                 "task_count", "state"])


def write_results_csv(result, path):
    df = events_to_frame(result.events)
    df.to_csv(path, index=False)
    print(f"\nPer-task results written to {path}")
    return df


# ====================
# Visualization
# ====================
def plot_vm_energy(result, show=True):
    df = vms_to_frame(result.final_vm_states)

    fig, (ax_energy, ax_util) = plt.subplots(1, 2, figsize=(12, 5))
    sns.barplot(x="vm_id", y="energy_used", hue="state", data=df, ax=ax_energy)
    ax_energy.set_title("Energy Used per VM")
    ax_energy.set_xlabel("VM")
    ax_energy.set_ylabel("Energy (kWh)")
    ax_energy.grid(axis='y')

    sns.barplot(x="vm_id", y="utilization", hue="state", data=df, ax=ax_util)
    ax_util.axhline(100, color="red", linestyle="--", linewidth=1)
    ax_util.set_title("Final Utilization per VM")
    ax_util.set_xlabel("VM")
    ax_util.set_ylabel("CPU Utilization (%)")
    ax_util.grid(axis='y')

    plt.tight_layout()
    if show:
        plt.show()
    return fig
