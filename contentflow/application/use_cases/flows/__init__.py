"""Flow use cases: flows, ordered states, default state seeding."""

from contentflow.application.use_cases.flows.flow_operations import FlowService
from contentflow.application.use_cases.flows.seed_default_states import (
    SeedDefaultStatesUseCase,
)
from contentflow.application.use_cases.flows.state_operations import StateService

__all__ = [
    "FlowService",
    "SeedDefaultStatesUseCase",
    "StateService",
]
