"""
Example: Incremental Sampling Driven by a Frame Loop
=====================================================
Simulates a UI dragging the tilt slider while the field is being drawn.

Each slider move issues a new request. Requests arriving within the debounce
window are coalesced, and a job still running when a newer request arrives
stops at its next slice without emitting anything. Only the final tilt
produces a completed field.

Host: ManualFrameHost, ticked like a 60 Hz animation loop
Plane: side elevation through the room centerline at 0.25 m
"""

from dataclasses import replace

from sonicfield import (
    DeploymentConfiguration,
    FieldSampler,
    ManualFrameHost,
    RoomDimensions,
    SamplerSettings,
    SamplingPlane,
    get_profile,
)

room = RoomDimensions(width=20.0, depth=30.0, height=8.0)
profile = get_profile("lacoustics-kara-ii")
deployment = DeploymentConfiguration(speaker_id=profile.id, quantity=10, trim_height=6.5)

host = ManualFrameHost()
cells_drawn = 0


def on_cell(row, col, sample):
    global cells_drawn
    cells_drawn += 1


def on_complete(result):
    print(f"generation {result.generation}: {result.min_spl:.1f} to {result.max_spl:.1f} dB")


sampler = FieldSampler(
    SamplingPlane("side_elevation", resolution=0.25),
    host,
    on_cell=on_cell,
    on_complete=on_complete,
    settings=SamplerSettings(slice_budget_ms=8.0, debounce_ms=50.0),
)

# Drag the slider from 0° to 8°, one step every other frame
for tilt in range(0, 9):
    sampler.request(room, profile, replace(deployment, tilt_angle=float(tilt)))
    host.tick()
    host.tick()

frames = host.run_until_idle()
print(f"{cells_drawn} cells drawn, {frames} frames after the last move")
