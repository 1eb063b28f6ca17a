from .comparator import Comparator
from .particle import Particle
from .swarm import Swarm, select_extremal

__all__ = ["Comparator", "Particle", "Swarm", "select_extremal"]
