"""Business logic: rubrics, evaluation, dispatch and triggers."""
