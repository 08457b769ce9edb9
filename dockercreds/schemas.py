import voluptuous as vol

REGISTRY_TYPES = ["dockerhub", "custom", "ecr"]
SECRET_REGISTRY_TYPES = ["dockerhub", "custom"]
USAGES = ["synth", "self_update", "asset_publishing"]

# The rendered credentials are echoed inside single quotes on the build machine
NO_SINGLE_QUOTES = vol.Match(r"^[^']*$", msg="Single quotes are not allowed")


def fields_must_match_type(fields):
    """Checks that a registry has exactly the fields its type needs.

    Secret backed registries need a secret and cannot list repositories, ECR registries need
    at least one repository and cannot have a secret.
    """
    registry_type = fields["type"]
    if registry_type in SECRET_REGISTRY_TYPES:
        if "secret_arn" not in fields:
            raise vol.Invalid(f"A {registry_type} registry needs a 'secret_arn'")
        if "repositories" in fields:
            raise vol.Invalid(f"A {registry_type} registry cannot have 'repositories'")
    if registry_type == "custom" and "domain" not in fields:
        raise vol.Invalid("A custom registry needs a 'domain'")
    if registry_type != "custom" and "domain" in fields:
        raise vol.Invalid(f"The domain of a {registry_type} registry cannot be configured")
    if registry_type == "ecr":
        if "repositories" not in fields:
            raise vol.Invalid("An ecr registry needs at least one repository")
        for key in ("secret_arn", "secret_username_field", "secret_password_field"):
            if key in fields:
                raise vol.Invalid(f"An ecr registry cannot have '{key}'")
    return fields


REGISTRY_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required("type", description="Kind of registry"): vol.All(str, vol.In(REGISTRY_TYPES)),
            vol.Optional(
                "domain", description="Domain of a custom registry, for example registry.example.com"
            ): vol.All(str, vol.Length(min=1), NO_SINGLE_QUOTES),
            vol.Optional(
                "secret_arn", description="ARN of the Secrets Manager secret containing the credentials"
            ): vol.All(str, vol.Length(min=1), NO_SINGLE_QUOTES),
            vol.Optional(
                "secret_username_field", description="Field in the secret holding the username"
            ): vol.All(str, NO_SINGLE_QUOTES),
            vol.Optional(
                "secret_password_field", description="Field in the secret holding the password"
            ): vol.All(str, NO_SINGLE_QUOTES),
            vol.Optional(
                "repositories",
                description=(
                    "ECR repository uris. All repositories must live in the same registry, "
                    "the first one determines the registry domain"
                ),
            ): vol.All([vol.All(str, NO_SINGLE_QUOTES)], vol.Length(min=1)),
            vol.Optional(
                "assume_role_arn", description="Role to assume before fetching credentials or images"
            ): vol.All(str, vol.Length(min=1), NO_SINGLE_QUOTES),
            vol.Optional("usages", default=[], description="Pipeline phases needing this registry"): [
                vol.All(str, vol.In(USAGES))
            ],
        }
    ),
    fields_must_match_type,
)

DOCKERCREDS_BASE_SCHEMA = vol.Schema(
    {vol.Optional("docker_registries", default=[]): [REGISTRY_SCHEMA]}, extra=vol.ALLOW_EXTRA
)
