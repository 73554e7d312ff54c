# energy_model.py

# Power drawn per GHz of clock, in kW.
POWER_COEFFICIENT = 0.1
# Baseline runs every task at the top DVFS tier (no frequency scaling).
BASELINE_FREQUENCY = 3.0
# A task is SLA compliant while its energy stays within runtime * factor.
SLA_ENERGY_FACTOR = 0.1


def _energy(runtime, freq_ghz):
    power = freq_ghz * POWER_COEFFICIENT
    time_hr = runtime / 3600.0
    return power * time_hr


def task_energy(runtime, frequency):
    """
    Energy (kWh) a task consumes when run for `runtime` seconds at `frequency`.

    :param runtime: Task runtime in seconds
    :param frequency: A Frequency tier or a plain GHz value
    """
    return _energy(runtime, float(getattr(frequency, "ghz", frequency)))


def baseline_energy(runtime):
    """
    Energy the same task would cost at fixed maximum frequency. Used for
    comparison only, never charged to a VM.
    """
    return _energy(runtime, BASELINE_FREQUENCY)


def check_sla(task, energy_used):
    return energy_used <= task.runtime * SLA_ENERGY_FACTOR
