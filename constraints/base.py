"""Base class for circuits.

A Circuit is configured once against a ConstraintSystem, producing a config
object (column and selector handles). The same config is then used to
synthesize the witness of each proving instance through a Layouter.

Example:
    class MyCircuit(Circuit):
        def configure(self, cs):
            return MyConfig.configure(cs, cs.advice_column())

        def synthesize(self, config, layouter):
            config.table.load(layouter)
            config.assign(layouter, self.value)
"""

from abc import ABC, abstractmethod
from typing import Any

from circuit.constraint_system import ConstraintSystem
from witness.layouter import Layouter


class Circuit(ABC):
    """Circuit definition: shape declaration plus per-instance witness."""

    @abstractmethod
    def configure(self, cs: ConstraintSystem) -> Any:
        """Declare columns, selectors, gates and lookups.

        Args:
            cs: ConstraintSystem being built

        Returns:
            Config object passed back to synthesize
        """
        pass

    @abstractmethod
    def synthesize(self, config: Any, layouter: Layouter) -> None:
        """Load tables and assign this instance's witness.

        Args:
            config: Object returned by configure
            layouter: Layouter over this instance's Assignment
        """
        pass
