"""Testing – fakes for exercising the pipeline without real destinations."""
