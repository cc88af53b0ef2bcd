import atheris


class EnhancedDataProvider(atheris.FuzzedDataProvider):
    def ConsumeShortString(self) -> str:
        return self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(0, 8))

    def ConsumePairs(self, keys: list[str]) -> list[tuple[str, str]]:
        pairs = []
        for _ in range(self.ConsumeIntInRange(0, 32)):
            if self.ConsumeBool():
                key = self.PickValueInList(keys)
            else:
                key = self.ConsumeShortString()
            pairs.append((key, self.ConsumeShortString()))
        return pairs
