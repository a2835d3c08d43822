"""Runtime services shared by the core and its adapters."""
