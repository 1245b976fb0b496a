"""Host adapters for embedding the engine in UI toolkits."""
