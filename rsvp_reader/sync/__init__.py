"""Position sync: sink interface and the policy deciding when to save.

WHY: The engine must report progress without knowing how it is stored.
sinks.py defines the call boundary, policy.py decides when to cross it.

RULES:
- The policy never blocks playback on a save
- Storage, transport, queueing, and retry live outside this package
"""
