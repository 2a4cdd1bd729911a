"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'table', 'put-role')

        Returns:
            Formatted resource name
        """
        if not resource:
            return f"{self.project}-{self.environment}"
        return f"{self.project}-{self.environment}-{resource}"

    def logical_name(self, model_name: str, suffix: str = "") -> str:
        """
        Generate a resource name derived from the record model.

        Args:
            model_name: Model identifier in PascalCase (e.g., 'ShoppingCart')
            suffix: Optional resource suffix (e.g., 'api')

        Returns:
            Lower-case, hyphenated name such as 'shopping-cart-api'
        """
        words = []
        current = ""
        for char in model_name:
            if char.isupper() and current:
                words.append(current)
                current = char
            else:
                current += char
        if current:
            words.append(current)

        base = "-".join(word.lower() for word in words)
        return self.name(f"{base}-{suffix}" if suffix else base)
