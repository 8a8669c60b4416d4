"""Exceptions raised while rendering Mobiledoc documents."""


class MobiledocRenderError(ValueError):
    """Base class for every fatal rendering error."""

    pass


class UnsupportedVersionError(MobiledocRenderError):
    """The document declares a version no renderer handles."""

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f'Unexpected Mobiledoc version "{version}"')


class UnknownSectionTypeError(MobiledocRenderError):
    """A section carries a discriminant the renderer does not know."""

    def __init__(self, section_type: object) -> None:
        self.section_type = section_type
        super().__init__(f'Renderer cannot render type "{section_type}"')


class UnknownMarkerTypeError(MobiledocRenderError):
    """A marker run carries a kind other than text or atom."""

    def __init__(self, marker_type: object) -> None:
        self.marker_type = marker_type
        super().__init__(f"Unknown markup type ({marker_type})")


class MissingDefinitionError(MobiledocRenderError):
    """A card, atom or markup index does not point at a definition."""

    def __init__(self, kind: str, index: object) -> None:
        self.kind = kind
        self.index = index
        super().__init__(f"No {kind} definition found at index {index}")


class PluginNotFoundError(MobiledocRenderError):
    """No plugin matched a name and no fallback handler was configured."""

    kind = "Plugin"
    handler_option = "unknown_handler"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'{self.kind} "{name}" not found but no '
            f"{self.handler_option} was registered"
        )


class CardNotFoundError(PluginNotFoundError):
    kind = "Card"
    handler_option = "unknown_card_handler"


class AtomNotFoundError(PluginNotFoundError):
    kind = "Atom"
    handler_option = "unknown_atom_handler"


class ConfigurationError(MobiledocRenderError):
    """Renderer options were passed in the wrong shape."""

    pass


class PluginValidationError(ConfigurationError):
    """A card or atom does not satisfy the plugin contract."""

    pass


class InvalidRenderResultError(MobiledocRenderError):
    """A plugin render returned something other than a string or None."""

    def __init__(self, kind: str, name: str, result: object) -> None:
        self.kind = kind
        self.name = name
        super().__init__(
            f'{kind} "{name}" must render markdown, '
            f"but result was {type(result).__name__}"
        )


class MobiledocJSONError(MobiledocRenderError):
    """The input text could not be decoded as a Mobiledoc JSON object."""

    pass
