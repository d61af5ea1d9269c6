"""
Tasks (FINAL)

A task owns one complete run: it opens outputs, prepares the test
source, drives the scheduler and closes everything it opened.

Modules:
- state       : phases, budgets, running totals
- test_set    : cached / live held-out test source
- scheduler   : the PRETRAIN -> (TRAIN_CHUNK -> TEST_PASS -> RECORD)* loop
- periodic_heldout : the task entry point
"""
