import math
import random
from typing import Callable

from .moves import Move


def always_accept(move: Move) -> bool:
    return True


class CoolingSchedule:
    """
    Temperature of an annealing walk of fixed length.

    After step ``t`` (counting from 0) of ``total_iterations`` steps the
    temperature is multiplied by ``(1 - (t + 1) / total_iterations) ** 0.25``,
    so it reaches zero on the last step.
    """

    def __init__(self, initial_temperature: float, total_iterations: int) -> None:
        self.initial_temperature = initial_temperature
        self.temperature = initial_temperature
        self.total_iterations = total_iterations
        self.step = 0

    def cool(self) -> float:
        "Applies one cooling step and returns the new temperature."
        fraction = max(0.0, 1 - (self.step + 1) / self.total_iterations)
        self.temperature *= fraction ** 0.25
        self.step += 1
        return self.temperature

    def __repr__(self) -> str:
        return "<CoolingSchedule [step {}/{}, temperature {:.6g}]>".format(
            self.step, self.total_iterations, self.temperature
        )


def metropolis_acceptance(
    schedule: CoolingSchedule, rng: random.Random
) -> Callable[[Move], bool]:
    """
    Function factory that binds and returns a Metropolis acceptance function.

    The bound function draws one uniform number per call, accepts improving
    moves and accepts a worsening move when ``exp(-delta / temperature)``
    exceeds the draw. Every call, accepted or not, cools the schedule once.
    A temperature of zero accepts improving moves only.

    :param schedule: temperature owner, cooled after every decision.
    :type schedule: CoolingSchedule
    :param rng: source of the uniform draws.
    :type rng: random.Random

    :return: An acceptance function for simulated annealing runs.
    :rtype: Callable[[Move], bool]
    """

    def simulated_annealing_acceptance_function(move):
        draw = rng.random()
        temperature = schedule.temperature

        if move.delta < 0:
            accepted = True
        elif temperature > 0:
            accepted = math.exp(-move.delta / temperature) > draw
        else:
            accepted = False

        schedule.cool()
        return accepted

    return simulated_annealing_acceptance_function
