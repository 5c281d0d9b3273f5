"""
Task primitives.

Components:
- resolver.py: normalizes a task input (value, callable, awaitable) into its value
- timing.py: sleep / at_least / at_most / limit
- named_queue.py: per-name serialization of tasks
- debounce.py: per-name batching of bursts into one reaction call
- poller.py: cancellable polling loop
"""
