from dataclasses import dataclass


@dataclass
class ImportReport:
    job: str
    label: str
    imported: int = 0
    skipped: int = 0
    mismatched: int = 0

    def summary(self):
        return (f"{self.job}: imported {self.imported} {self.label}, "
                f"skipped {self.skipped}, mismatched {self.mismatched}")
