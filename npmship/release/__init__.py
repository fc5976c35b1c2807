"""Release publishing bounded context.

Layers, innermost first:
- domain: environments, release models and the version resolver (pure)
- resolve: turning an environment snapshot into validated inputs
- infra: adapters for npm, yarn, gh and the filesystem
- flow: publish gate, publisher and pipeline sequencing
- view: console rendering of decisions and outcomes
"""

from __future__ import annotations
