from functools import partial
from collections import namedtuple
import jax.numpy as np
from jax import grad, jacfwd, jit, lax, value_and_grad
