"""Domain objects of the chunking engine: chunks and splitter value objects."""
