"""Tunable timings and probabilities for simulated behavior."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationSettings:
    """Knobs for the realtime generator. Delays are in seconds."""

    tick_interval: float = 3.0
    income_probability: float = 0.2
    flap_probability: float = 0.1
    churn_probability: float = 0.15
    flap_revert_delay: float = 5.0
    income_max_amount: float = 5.0
    income_account_name: str = "Checking Account"
    cpu_min: int = 5
    cpu_max: int = 95
    cpu_step: float = 5.0
    cpu_fallback: int = 15
    memory_min: int = 20
    memory_max: int = 95
    memory_step: float = 3.0
    memory_fallback: int = 50

    def __post_init__(self):
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        for name in ("income_probability", "flap_probability", "churn_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")


@dataclass(frozen=True)
class ServiceTimings:
    """Delays and odds for simulated background work triggered by users."""

    domain_verification_delay: float = 2.5
    domain_verification_success_rate: float = 0.7
    chat_reply_min_delay: float = 1.5
    chat_reply_max_delay: float = 2.5
    reset_delay: float = 1.0
