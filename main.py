# DVFS-based power-aware scheduling over a small pool of VMs, compared against
# a fixed maximum-frequency baseline.

import argparse

import numpy as np

from datacenter import CONSOLIDATION_THRESHOLD
from Helper import MAX_VMS, MAX_TASKS, create_vm_list, create_task_list, predict_workload
from Reporter import block_print, enable_print, print_report, write_results_csv, plot_vm_energy
from Runner import run_simulation
from schedule import POLICIES


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="DVFS-Based Power-Aware Scheduling Simulation")
    parser.add_argument("--vms", type=int, default=MAX_VMS, help="number of VMs in the pool")
    parser.add_argument("--tasks", type=int, default=MAX_TASKS, help="number of tasks to schedule")
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: unseeded)")
    parser.add_argument("--policy", choices=POLICIES, default="first_fit")
    parser.add_argument("--threshold", type=int, default=CONSOLIDATION_THRESHOLD,
                        help="consolidation utilization threshold (percent)")
    parser.add_argument("--csv", default=None, help="write per-task results to this CSV file")
    parser.add_argument("--plot", action="store_true", help="plot per-VM energy and utilization")
    parser.add_argument("--quiet", action="store_true", help="suppress the console report")
    return parser.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    rng = np.random.default_rng(args.seed)

    vms = create_vm_list(args.vms, rng)
    tasks = create_task_list(args.tasks, rng)
    workload = predict_workload(rng)

    result = run_simulation(vms, tasks, policy=args.policy,
                            consolidation_threshold=args.threshold)

    if args.quiet:
        block_print()
    try:
        print("DVFS-Based Power-Aware Scheduling Simulation")
        print_report(tasks, result, predicted_workload=workload)
        if args.csv:
            write_results_csv(result, args.csv)
    finally:
        if args.quiet:
            enable_print()

    if args.plot:
        plot_vm_energy(result)
    return result


def main(argv=None):
    run(argv)


if __name__ == "__main__":
    main()
