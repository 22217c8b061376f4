"""pypyr steps that make up the ``blame`` pipeline."""
