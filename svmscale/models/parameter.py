"""Model parameters shared with the SVM solver."""

from dataclasses import dataclass


@dataclass
class Parameter:
    """Holds the kernel parameters a solver reads from a dataset.

    Only `gamma` is derived from the data: when it is left at 0, reading a
    dataset sets it to `1 / max_index`.

    Attributes:
        gamma: RBF/polynomial kernel width; 0 means unset.
    """

    gamma: float = 0.0

    def apply_default_gamma(self, max_index: int) -> bool:
        """Defaults `gamma` to `1 / max_index` when it is unset.

        Args:
            max_index: Largest coordinate index seen in the dataset.

        Returns:
            True if `gamma` was changed.
        """
        if self.gamma == 0 and max_index > 0:
            self.gamma = 1.0 / max_index
            return True
        return False
