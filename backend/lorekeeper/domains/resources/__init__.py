"""Shared resource template: definition, repository, service and fakes.

Every ownable resource (characters, items, races, archetypes, perks, skills,
tags, images) is served by ``ResourceService`` configured with a
``ResourceDefinition``. Resource packages only add what differs.
"""
