"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They coordinate between entities, ports, and external systems.

This layer contains:
- naming/ : release name synthesis (tokenizer, parser, validator, builder)
- packaging : season pack vs per-episode classification
- release_pipeline : Radarr/Sonarr driven export, torrent and upload runs
- publisher : fan-out of uploads to the configured trackers

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
