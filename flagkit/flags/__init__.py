"""
Flag composition for FlagKit.

Submodules:
- accumulator: ordered flag token storage, snapshots and defaults reset
- composer: platform-conditioned flag and definition additions
- baseline: project-wide defaults applied after detection
"""
