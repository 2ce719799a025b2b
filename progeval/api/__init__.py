"""
progeval.api - User-Friendly Facade
===================================

This module provides an off-the-shelf interface for program evaluations,
organized by the questions evaluators ask rather than by statistical method.
In terms of the design patterns, this is the facade pattern.

Examples
--------
>>> # Planning: participants per group for a medium effect
>>> from progeval.api.evaluation import plan_sample_size
>>> plan = plan_sample_size("medium", alpha=0.05, power=0.8)
>>>
>>> # Analysis: the whole pre/post + follow-up evaluation
>>> from progeval.api.evaluation import evaluate_program
>>> # report = evaluate_program(dataset)

Unified Interface
-----------------
All functionality is consolidated in `progeval.api.evaluation`:
- `plan_sample_size()`: sample size for an expected effect
- `detectable_effect()`: minimum detectable effect for a group size
- `describe_groups()`: per-group descriptive statistics
- `compare_outcomes()`: t-test and Cohen's d
- `test_follow_up()`: chi-squared test and phi
- `evaluate_program()`: all of the above on one dataset

Architecture
------------
This facade delegates to the underlying components:
- progeval.core: data model, configuration and errors
- progeval.stats: statistical computations
- progeval.runtime: whole-study templates
"""
