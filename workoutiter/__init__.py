"""Step through a rotating list of workouts, one at a time, in a Tk window."""

__version__ = "0.1.0"
__all__ = ["persistence", "state", "ui"]