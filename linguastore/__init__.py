"""linguastore: localization bundle store with keyword search."""
