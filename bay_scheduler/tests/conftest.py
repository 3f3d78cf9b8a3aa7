from bay_scheduler.tests.domain.scheduling.fixtures import (  # noqa: F401
    assignment_factory,
    bay_factory,
    project,
    project_factory,
    snapshot,
    store,
    two_bays,
)
