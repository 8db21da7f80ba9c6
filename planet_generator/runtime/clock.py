# planet_generator/runtime/clock.py

"""
================================================================================
SIMULATION CLOCK
================================================================================
This module provides a self-contained, data-only class that turns variable
frame times into a whole number of fixed physics steps.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): Optional overrides for 'fixed_timestep', 'time_scale'
      and 'max_steps_per_frame'.
- Public Methods:
    - update(real_delta_time): Returns the number of fixed steps to run.
    - set_speed(new_scale): Changes the speed of time.
    - get_time_string(): Returns a formatted string of the simulated time.
- Public Properties:
    - tick_count, elapsed_seconds (read-only).
- Side Effects: None.
- Invariants: The number of steps taken depends only on the total scaled
  time, not on how it was split across frames (unless the per-frame cap
  drops time after a stall).
================================================================================
"""

from .. import config as DEFAULTS

class SimulationClock:
    """Manages the passage of simulated time."""

    def __init__(self, config: dict = None):
        config = config or {}
        self.fixed_timestep = config.get('fixed_timestep', DEFAULTS.FIXED_TIMESTEP_SECONDS)
        self.time_scale = max(0.0, config.get('time_scale', DEFAULTS.INITIAL_TIME_SCALE))
        self.max_steps_per_frame = config.get('max_steps_per_frame', DEFAULTS.MAX_STEPS_PER_FRAME)

        if self.fixed_timestep <= 0:
            raise ValueError(f"fixed_timestep must be positive, got {self.fixed_timestep}")

        self._accumulator = 0.0
        self._tick_count = 0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def elapsed_seconds(self) -> float:
        # Derived from the tick count so it never drifts.
        return self._tick_count * self.fixed_timestep

    def update(self, real_delta_time: float) -> int:
        """
        Advances the clock by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.

        Returns:
            int: How many fixed steps the caller should simulate this frame.
        """
        if self.time_scale <= 0:
            return 0 # Time is paused, do nothing.

        self._accumulator += real_delta_time * self.time_scale
        steps = int(self._accumulator // self.fixed_timestep)

        if steps > self.max_steps_per_frame:
            # Drop the backlog instead of spiralling.
            steps = self.max_steps_per_frame
            self._accumulator = 0.0
        else:
            self._accumulator -= steps * self.fixed_timestep

        self._tick_count += steps
        return steps

    def set_speed(self, new_scale: float):
        """
        Sets the speed of simulated time.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.time_scale = max(0.0, new_scale)

    def get_time_string(self) -> str:
        """Returns a formatted string of the simulated time."""
        total = self.elapsed_seconds
        minutes, seconds = divmod(total, 60.0)
        hours, minutes = divmod(int(minutes), 60)
        return f"Tick {self._tick_count} - {hours:02d}:{minutes:02d}:{seconds:05.2f}"
