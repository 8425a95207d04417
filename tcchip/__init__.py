#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED
from .cpu import CPU
from .debugger import Debugger
from .host import Host
from .hostio import Loader


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    opt_renderer = args["renderer"]

    if opt_renderer is None or opt_renderer == "pygame":
        # pylint: disable=import-outside-toplevel, raise-missing-from
        try:
            import pygame  # noqa: F401
        except ImportError:
            if opt_renderer is None:
                opt_renderer = "null"  # Run headless
            else:
                raise StartupError("PyGame does not appear to be installed.")
        else:
            from .renderers.r_pygame import Renderer

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .renderers.r_null import Renderer

    # Read ROM binary.  The CPU writes it into RAM along with the system font.
    program = Loader().load_binary(args["filename"])

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    seed = args["seed"]
    screen_wrap = args["screen_wrap"]
    cpu = CPU(
        program,
        rng=None if seed is None else Random(seed),
        allow_wrapping=True if screen_wrap is None else bool(screen_wrap),
        debugger=debugger
    )

    renderer = Renderer(scale=args["scale"], palette=args["palette"], smoothing=args["smoothing"])
    clock_speed = args["clock_speed"]
    host = Host(cpu, renderer, clock_speed=DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed)

    try:
        host.run(args["cycles"])
    finally:
        # The CPU has stopped, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        renderer.shutdown()

    return cpu
