"""Fixed numerical settings of the fitting engine."""

MIN_SAMPLES = 2
DEFAULT_N_STEPS = 100

SATURATION_ITERATIONS = 100
SATURATION_DAMPING = 0.1
SATURATION_A_SCALE = 1.1
SATURATION_B_INIT = 0.1

SATURATION_SOLVERS = ("fixed", "least_squares")
