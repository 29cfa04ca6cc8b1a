"""Application core: ports, controller and runtime state."""
