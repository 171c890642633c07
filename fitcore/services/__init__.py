# fitcore/services/__init__.py
"""
Workout session state machine.

Every mutating call loads the owning workout under a row lock, checks the
transition guard, applies the change and commits in one transaction.
"""
