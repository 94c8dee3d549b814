"""Storyweaver: a turn-based narrative engine.

A player character attempts narrated actions; each one is resolved by a d20
check against a difficulty, then narrated either locally or by a remote
narrator service (with local fallback). The resulting story text and state
deltas are merged into the session by the turn controller.

Modules:
    checks     : modifier / d20 / difficulty helpers
    models     : pydantic domain models (character, flags, session, results)
    storage    : best-effort key-value persistence adapters
    choices    : authored choice pools per scene
    characters : character editing and auto-generation
    narrator   : LocalNarrator and HttpNarrator
    weaver     : mode switch between local and remote narration
    config     : environment-driven settings
    pipeline   : TurnController, the only state-transition path
"""
