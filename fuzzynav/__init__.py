"""
fuzzynav: Mamdani fuzzy-logic navigation of simulated vehicles.

Each vehicle moves at constant velocity; a fuzzy controller maps distance,
heading error and relative velocity to a turning rate so the vehicle reaches
a target on a required arrival heading.
"""
VERSION = "0.1.0"

from fuzzynav.errors import FuzzyNavError, InvalidParameter, UnknownReference, DefuzzificationUndefined
from fuzzynav.config import SimulationConfig, load_config
from fuzzynav.core.vehicle import VehicleType, VehicleState, get_preset
from fuzzynav.navigation.controller import NavigationController
from fuzzynav.simulation.simulator import Simulator, simulate_vehicles
