"""
Example: Stereo Line Arrays in a Medium Hall
=============================================
Two flown 8-element line arrays either side of the stage, with a center
fill covering the first rows.

This demonstrates the eager workflow: build a room and a deployment, run
the coverage analyzer, then sample the top-down field headlessly and save it.

Room: 15 m × 25 m × 6 m (medium preset)
Mains: Meyer LINA × 8 per side, 10 m spread, 5° toe-in
Center fill: EV ETX-12P at -3 dB
Output: stereo_field.h5
"""

from sonicfield import (
    CenterFillConfig,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
    SamplingPlane,
    analyze_coverage,
    get_profile,
    run_to_completion,
)
from sonicfield.analysis import coverage_from_field, suggest_tilt
from sonicfield.io import FieldResultWriter
from sonicfield.sampling import FieldRequest

room = RoomDimensions.from_preset("medium")
mains = get_profile("meyer-lina")
fill = get_profile("ev-etx-12p")

deployment = DeploymentConfiguration(
    speaker_id=mains.id,
    quantity=8,
    trim_height=5.0,
    tilt_angle=suggest_tilt(room, 5.0),
    horizontal_aim=5.0,
    deployment_mode=DeploymentMode.STEREO_LR,
    array_spread=10.0,
    center_fill=CenterFillConfig(enabled=True, profile_id=fill.id, gain_db=-3.0),
)

analysis = analyze_coverage(room, mains, deployment, fill)
print(f"Center stage:  {analysis.center_stage_spl:.1f} dB")
print(f"Front to back: {analysis.front_to_back_ratio:+.1f} dB")
print(f"Coverage:      {analysis.coverage_percentage:.0f}%")

# Sample the floor plan at 0.5 m
result = run_to_completion(SamplingPlane("top_down", resolution=0.5), room, mains, deployment, fill)
print(f"Field range:   {result.min_spl:.1f} to {result.max_spl:.1f} dB")
print(f"Floor within -10/+6 dB: {coverage_from_field(result, analysis.center_stage_spl):.0f}%")

with FieldResultWriter("stereo_field.h5") as writer:
    writer.write(
        result,
        request=FieldRequest.capture(room, mains, deployment, fill),
        coverage=analysis,
    )
