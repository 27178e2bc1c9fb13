"""
bizcomms — Business Communications API client library.

Package structure:
    bizcomms.base              — BaseScript abstract class (logging, timing, CLI)
    bizcomms.errors            — AuthenticationError, RemoteOperationError
    bizcomms.models            — Typed dataclasses (Brand, Agent, Location) + name helpers
    bizcomms.google_factory    — BusinessCommunicationsFactory (single-flight, cached client)
    bizcomms.field_mask        — FieldMask (dotted update paths)
    bizcomms.patching          — PatchRequest / submit_patch (partial updates)
    bizcomms.brands_client     — BrandsClient
    bizcomms.agents_client     — AgentsClient
    bizcomms.locations_client  — LocationsClient

Service-account loading lives in the top-level google_auth module.
"""
