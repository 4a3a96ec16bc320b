import os

from hypothesis import settings

# Subprocess coverage, enabled by `COVERAGE_PROCESS_START=pyproject.toml`.
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

settings.register_profile("ci", max_examples=500, deadline=None)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
