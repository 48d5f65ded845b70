"""Normalization layer.

- timestamps: repair and conversion of extractor timestamps
- syslog: syslog line parsing and year inference
- dispatcher: routing of records to mappers
- expander: timeline event expansion
- prune: empty-value pruning and timestamp defaulting
- pipeline: the end-to-end record pipeline
"""
