"""
Synthetic data generation for ABA Insights.
"""

from .generator import (
    GeneratorConfig,
    generate_clients,
    generate_programs,
    generate_targets,
    generate_events,
    generate_dataset,
)

__all__ = [
    'GeneratorConfig',
    'generate_clients',
    'generate_programs',
    'generate_targets',
    'generate_events',
    'generate_dataset',
]
