"""
Demo Manager - Scaffolds an example knowledge document.

The demo document has two dense clusters (particle physics and philosophy
of knowledge) joined by a single bridge edge, so community detection finds
them at once. One relationship refers to ``oatmeal``, which is never
defined and therefore shows up as a placeholder node.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEMO_FILENAME = "demo.toml"

DEMO_DOCUMENT = '''\
# --- PHYSICS CLUSTER ---

[electrons]
label = "Electrons"
color = "#FA4F40"
size = 25
link = "https://en.wikipedia.org/wiki/Electron"
description = """
# Electrons
Electrons are **subatomic particles** with a negative elementary electric charge.
They belong to the first generation of the lepton particle family.
Key properties:
- Mass: 9.109 × 10⁻³¹ kg
- Charge: -1e
"""

[leptons]
label = "Leptons"
size = 20
description = "A subatomic particle, such as an electron, muon, or neutrino, which does not take part in the strong interaction."

[quarks]
label = "Quarks"
description = "Elementary particles and a fundamental constituent of matter. Quarks combine to form composite particles called hadrons."

[protons]
label = "Protons"
description = "A subatomic particle with a positive electric charge found in the nucleus of every atom."

[nucleus]
label = "Nucleus"
description = "The small, dense region consisting of protons and neutrons at the center of an atom."

[atoms]
label = "Atoms"
description = "The smallest unit of ordinary matter that forms a chemical element."

# --- PHILOSOPHY CLUSTER ---

[epistemology]
label = "Epistemology"
color = "#405CFA"
size = 25
description = """
# Epistemology
The theory of knowledge, especially with regard to its methods, validity, and scope.
It is the investigation of what distinguishes justified belief from opinion.
"""

[empiricism]
label = "Empiricism"
description = "The theory that all knowledge is derived from sense-experience."

[rationalism]
label = "Rationalism"
description = "The theory that reason rather than experience is the foundation of certainty in knowledge."

[logic]
label = "Logic"
description = "Reasoning conducted or assessed according to strict principles of validity."

[science]
label = "Science"
size = 30
description = "A systematic enterprise that builds and organizes knowledge in the form of testable explanations and predictions."

# --- RELATIONSHIPS ---

[[relationships]]
source = "electrons"
target = "leptons"
type = "is_a"

[[relationships]]
source = "quarks"
target = "protons"
type = "composes"

[[relationships]]
source = "quarks"
target = "oatmeal"
type = "compose"

[[relationships]]
source = "oatmeal"
target = "science"
type = "feeds"

[[relationships]]
source = "protons"
target = "nucleus"
type = "part_of"

[[relationships]]
source = "nucleus"
target = "atoms"
type = "core_of"

[[relationships]]
source = "empiricism"
target = "epistemology"
type = "branch_of"

[[relationships]]
source = "rationalism"
target = "epistemology"
type = "branch_of"

[[relationships]]
source = "logic"
target = "epistemology"
type = "foundation_of"

[[relationships]]
source = "science"
target = "empiricism"
type = "utilizes"

# --- THE CROSS-DOMAIN BRIDGE ---
[[relationships]]
source = "science"
target = "atoms"
type = "investigates"
'''


class DemoManager:
    """
    Manages the creation of the demo document.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def provision(self, filename: str = DEMO_FILENAME, overwrite: bool = False) -> Path:
        """
        Write the demo document into the root directory.

        Returns:
            Path: The written file.

        Raises:
            FileExistsError: If the file exists and ``overwrite`` is False.
        """
        target = self.root_dir / filename
        if target.exists() and not overwrite:
            raise FileExistsError(f"{target} already exists")

        self.root_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(DEMO_DOCUMENT, encoding="utf-8")
        logger.info(f"Demo document written to {target}")
        return target
