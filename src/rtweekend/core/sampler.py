"""Random number generation and stochastic vector sampling.

Every sampler takes the caller's RNG state and hands back the advanced state
next to the drawn value, so the integrator carries no hidden global random
source and a render is reproducible from its seed:

    value, state = random_float(state)

The state is a single u32 advanced by a 32-bit LCG; draws pass through the
PCG output permutation (RXS-M-XS) before being scaled to [0, 1).

Per-pixel streams are derived with seed_rng(seed, i, j), which makes each
pixel's samples independent of the order in which Taichi schedules pixels.
"""

import taichi as ti
import taichi.math as tm

from rtweekend.core.ray import length_squared, vec3

# LCG constants (a = 1 mod 4, c odd: full period mod 2^32)
_LCG_MULTIPLIER = 747796405
_LCG_INCREMENT = 1013904223
_PERMUTE_MULTIPLIER = 277803737

# 2^-24: draws keep the top 24 bits of the permuted word
_INV_2_24 = 1.0 / 16777216.0

# Upper bound on rejection sampling rounds (acceptance is >= 52% per round)
MAX_REJECTION_ROUNDS = 100


@ti.func
def _advance(state: ti.u32) -> ti.u32:
    return state * ti.u32(_LCG_MULTIPLIER) + ti.u32(_LCG_INCREMENT)


@ti.func
def _permute(state: ti.u32) -> ti.u32:
    word = ((state >> ((state >> ti.u32(28)) + ti.u32(4))) ^ state) * ti.u32(_PERMUTE_MULTIPLIER)
    return (word >> ti.u32(22)) ^ word


@ti.func
def hash_u32(x: ti.u32) -> ti.u32:
    """One PCG step used as an integer hash."""
    return _permute(_advance(x))


@ti.func
def seed_rng(seed: ti.u32, i: ti.i32, j: ti.i32) -> ti.u32:
    """Derive the RNG state for pixel (i, j) of a render seeded with seed."""
    mixed = seed ^ hash_u32(ti.cast(i, ti.u32) + hash_u32(ti.cast(j, ti.u32)))
    return hash_u32(mixed)


@ti.func
def random_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Returns:
        A tuple of (value, state).
    """
    rng = _advance(state)
    value = ti.cast(_permute(rng) >> ti.u32(8), ti.f64) * _INV_2_24
    return value, rng


@ti.func
def random_float_range(state: ti.u32, lo: ti.f64, hi: ti.f64):
    """Draw a uniform float in [lo, hi). Returns (value, state)."""
    r, rng = random_float(state)
    return lo + (hi - lo) * r, rng


@ti.func
def random_vec3(state: ti.u32):
    """Draw a vector uniformly from [0, 1)^3. Returns (vector, state)."""
    x, rng = random_float(state)
    y, rng = random_float(rng)
    z, rng = random_float(rng)
    return vec3(x, y, z), rng


@ti.func
def random_vec3_range(state: ti.u32, lo: ti.f64, hi: ti.f64):
    """Draw a vector uniformly from [lo, hi)^3. Returns (vector, state)."""
    x, rng = random_float_range(state, lo, hi)
    y, rng = random_float_range(rng, lo, hi)
    z, rng = random_float_range(rng, lo, hi)
    return vec3(x, y, z), rng


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Generate a random point inside the unit ball.

    Draws points uniformly in the [-1, 1)^3 cube and rejects them while
    their squared length is >= 1. Used for fuzzy metal reflection.

    Returns:
        A tuple of (point, state) with length(point) < 1.
    """
    rng = state
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for attempt in range(MAX_REJECTION_ROUNDS):
        if not found:
            candidate, rng = random_vec3_range(rng, -1.0, 1.0)
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p, rng


@ti.func
def random_unit_vector(state: ti.u32):
    """Generate a uniformly distributed point on the unit sphere.

    Closed form: azimuth a uniform in [0, 2*pi), height z uniform in
    [-1, 1), planar radius r = sqrt(1 - z^2). Uniform in z is uniform in
    area on the sphere (Archimedes), so no rejection is needed. Used for
    Lambertian scatter directions.

    Returns:
        A tuple of (unit vector, state).
    """
    a, rng = random_float_range(state, 0.0, 2.0 * tm.pi)
    z, rng = random_float_range(rng, -1.0, 1.0)
    r = tm.sqrt(1.0 - z * z)
    return vec3(r * tm.cos(a), r * tm.sin(a), z), rng


@ti.func
def random_in_unit_disk(state: ti.u32):
    """Generate a random point inside the unit disk in the xy-plane.

    Used for lens sampling in depth-of-field cameras.

    Returns:
        A tuple of (point, state), point = (x, y, 0) with x^2 + y^2 < 1.
    """
    rng = state
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for attempt in range(MAX_REJECTION_ROUNDS):
        if not found:
            x, rng = random_float_range(rng, -1.0, 1.0)
            y, rng = random_float_range(rng, -1.0, 1.0)
            if x * x + y * y < 1.0:
                p = vec3(x, y, 0.0)
                found = True
    return p, rng
