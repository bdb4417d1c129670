"""Light transport integrator.

ray_color follows a camera ray through the scene: each bounce asks the
struck material to scatter, multiplies the path throughput by the
attenuation and continues with the scattered ray. A ray that escapes picks
up the sky gradient; a ray that is absorbed or runs out of bounces
contributes black.

Taichi functions cannot recurse, so the recursive definition

    ray_color(r, 0)     = black
    ray_color(r, depth) = attenuation * ray_color(scattered, depth - 1)   on scatter
                        = black                                           on absorption
                        = background(r)                                   on a miss

is evaluated as a loop of at most `depth` bounces carrying the product of
attenuations. The results are identical.

Example:
    >>> from rtweekend.core.integrator import trace_ray
    >>> from rtweekend.scene.presets import two_sphere_scene
    >>> world = two_sphere_scene()
    >>> trace_ray(world, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))  # straight up: sky blue
    (0.5, 0.7, 1.0)
"""

import taichi as ti
import taichi.math as tm

from rtweekend.core.ray import Ray, make_ray, unit_vector, vec3
from rtweekend.materials.scatter import scatter

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Lower bound on hit distance; keeps a scattered ray from re-hitting the
# surface it leaves (shadow acne)
T_MIN = 0.001
T_MAX = tm.inf


@ti.func
def background(ray: Ray) -> vec3:
    """Sky gradient: white at the horizon blending to blue straight up.

    The blend factor is 0.5 * (unit(direction).y + 1), so a ray pointing
    straight down returns white.
    """
    unit_direction = unit_vector(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * vec3(1.0, 1.0, 1.0) + t * vec3(0.5, 0.7, 1.0)


@ti.func
def ray_color(ray: Ray, world: ti.template(), depth: ti.i32, state: ti.u32):
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        world: A committed scene exposing hit() and material().
        depth: Bounce budget; 0 returns black.
        state: The caller's RNG state.

    Returns:
        A tuple of (color, state).
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    current = ray
    rng = state

    # Active flag instead of break; a path still active when the budget
    # runs out contributes black
    active = 1
    for bounce in range(depth):
        if active == 1:
            rec = world.hit(current, T_MIN, T_MAX)
            if rec.hit == 0:
                color = throughput * background(current)
                active = 0
            else:
                direction, attenuation, did_scatter, rng = scatter(
                    world.material(rec.material_id), current, rec, rng
                )
                if did_scatter == 0:
                    active = 0
                else:
                    throughput *= attenuation
                    current = make_ray(rec.point, direction)

    return color, rng


@ti.kernel
def _trace_kernel(
    world: ti.template(),
    ox: ti.f64,
    oy: ti.f64,
    oz: ti.f64,
    dx: ti.f64,
    dy: ti.f64,
    dz: ti.f64,
    depth: ti.i32,
    seed: ti.u32,
) -> vec3:
    color = vec3(0.0, 0.0, 0.0)
    # Single iteration so the bounce loop in ray_color is not outermost
    for _ in range(1):
        ray = make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz))
        c, final_state = ray_color(ray, world, depth, seed)
        color = c
    return color


def trace_ray(
    world,
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = MAX_DEPTH,
    seed: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray from Python.

    Intended for tests and debugging; rendering goes through Renderer, which
    traces whole rows in one kernel launch. Commits the scene if needed.

    Args:
        world: The scene (a HittableList).
        origin: Ray origin.
        direction: Ray direction (any non-zero length).
        depth: Bounce budget.
        seed: RNG state for the path.

    Returns:
        The estimated color as an (R, G, B) tuple.
    """
    world.commit()
    color = _trace_kernel(
        world,
        origin[0],
        origin[1],
        origin[2],
        direction[0],
        direction[1],
        direction[2],
        depth,
        seed % (2**32),
    )
    return (float(color[0]), float(color[1]), float(color[2]))
