"""User registry domain: the User entity, field validators and the registry."""
