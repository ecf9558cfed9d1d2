# solartank/__init__.py
from .system_model import SimulationConfig, SimulationConstants, SimulationResult, CONSTANTS
from .simulator import run_simulation, run

__version__ = "0.1.0"
