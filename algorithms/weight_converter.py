class WeightConverter:
    """Utility for converting between kg and lb."""

    KG_TO_LB = 2.20462

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return round(kg * WeightConverter.KG_TO_LB, 2)

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(lb / WeightConverter.KG_TO_LB, 2)

    @classmethod
    def convert(cls, weight: float, from_units: str, to_units: str) -> float:
        """Convert ``weight`` between the ``lbs`` and ``kg`` unit names."""
        if from_units == to_units:
            return weight
        if from_units == "kg" and to_units == "lbs":
            return cls.kg_to_lb(weight)
        if from_units == "lbs" and to_units == "kg":
            return cls.lb_to_kg(weight)
        raise ValueError(f"cannot convert {from_units} to {to_units}")
