"""
Core World Model (FINAL)

Defines WHAT a held-out evaluation run talks to, independent of any
concrete learner, stream or evaluator.

Invariants:
- Examples are immutable once produced by a stream.
- Measurements are ordered (name, value) pairs; order is schema.
- Learner / stream / evaluator are NOT thread-safe; the run drives
  them from a single task.
- The monitor is the only surface touched from outside that task.

Core explicitly does NOT:
- Perform IO
- Decide when to train, test or record
- Know about CSV files or CLI options
"""
