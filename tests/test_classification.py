from collections import Counter

import pytest

from molhierarchy.config import InferenceSettings
from molhierarchy.core.domain.models.assembly import polymer_name
from molhierarchy.core.services.classification_service import ClassificationService


def _water(builder, hydrogen_first=False):
    if hydrogen_first:
        first = builder.atom("H")
        oxygen = builder.atom("O")
        builder.bond(first, oxygen)
        builder.bond(oxygen, builder.atom("H"))
    else:
        oxygen = builder.atom("O")
        builder.hydrogens(oxygen, 2)
    return oxygen


def _methane(builder):
    carbon = builder.atom("C")
    builder.hydrogens(carbon, 4)
    return carbon


def test_polyglycine_end_to_end(polyglycine):
    builder, backbone = polyglycine
    assembly = ClassificationService().classify(builder.atoms)

    assert assembly.chain_names == ["A"]
    polymer = assembly.polymers[0]
    assert [residue.name for residue in polymer.residues] == ["GLY"] * 5
    assert [residue.number for residue in polymer.residues] == [1, 2, 3, 4, 5]
    assert polymer.sequence == "GGGGG"
    assert len(polymer.joints) == 4
    assert all(len(joint.bonds) == 1 for joint in polymer.joints)
    assert all(atom.parent is not None for atom in builder.atoms)
    assert len(assembly.atoms) == len(builder.atoms)


def test_polyglycine_caps_hold_terminal_atoms(polyglycine):
    builder, backbone = polyglycine
    assembly = ClassificationService().classify(builder.atoms)
    first, last = assembly.residues[0], assembly.residues[-1]
    assert backbone[0]["N"].parent is first
    assert all(atom.parent is first for atom in backbone[0]["N"].neighbors())
    assert last.get_atom("OXT") is not None
    for residue, atoms in zip(assembly.residues, backbone):
        assert atoms["CA"].parent is residue


def test_terms_are_owned_exactly_once(polyglycine):
    builder, _ = polyglycine
    assembly = ClassificationService().classify(builder.atoms)
    polymer = assembly.polymers[0]
    owners = [*polymer.residues, *polymer.joints]
    identities = Counter(
        term.identity
        for owner in owners
        for term in (*owner.angles, *owner.dihedrals)
    )
    assert identities and max(identities.values()) == 1
    for residue in polymer.residues:
        for term in (*residue.bonds, *residue.angles, *residue.dihedrals):
            assert all(atom.parent is residue for atom in term.atoms)
    for joint in polymer.joints:
        for term in (*joint.angles, *joint.dihedrals):
            assert len({id(atom.parent) for atom in term.atoms}) == 2


def test_phi_psi_between_residues(polyglycine):
    builder, _ = polyglycine
    polymer = ClassificationService().classify(builder.atoms).polymers[0]
    phi, psi = polymer.phi_psi()
    assert len(phi) == 4
    assert len(psi) == 4


def test_ion_water_and_hetero(builder):
    sodium = builder.atom("Na", "NA")
    _water(builder)
    _water(builder, hydrogen_first=True)
    _methane(builder)
    assembly = ClassificationService().classify(builder.atoms)

    assert [ion.name for ion in assembly.ions] == ["NA: 1"]
    assert assembly.ions[0].atoms == [sodium]
    assert [water.name for water in assembly.water] == ["H2O: 1", "H2O: 2"]
    assert all(len(water.atoms) == 3 for water in assembly.water)
    assert [molecule.name for molecule in assembly.molecules] == ["Hetero 16.0: 1"]
    assert assembly.polymers == []


def test_unknown_element_degrades_to_hetero(builder):
    carbon = builder.atom("C")
    builder.bond(carbon, builder.atom("Xx"))
    builder.hydrogens(carbon, 3)
    assembly = ClassificationService().classify(builder.atoms)
    assert len(assembly.molecules) == 1
    assert len(assembly.molecules[0].atoms) == 5


def test_short_nitrogen_fragment_is_hetero(builder):
    nitrogen = builder.atom("N")
    builder.hydrogens(nitrogen, 3)
    assembly = ClassificationService().classify(builder.atoms)
    assert assembly.polymers == []
    assert len(assembly.molecules) == 1
    assert assembly.molecules[0].name.startswith("Hetero 17.0")


def test_two_chains_get_consecutive_names(builder):
    for _ in range(2):
        previous = None
        for i in range(4):
            previous = builder.amino_acid(previous=previous, terminal=i == 3)["C"]
    assembly = ClassificationService().classify(builder.atoms)
    assert assembly.chain_names == ["A", "B"]
    assert [polymer.sequence for polymer in assembly.polymers] == ["GGGG", "GGGG"]


def test_partitioned_classification_covers_same_atoms(polyglycine):
    builder, _ = polyglycine
    _water(builder)
    builder.atom("Cl", "CL")
    service = ClassificationService(InferenceSettings(partition_fragments=True))
    assembly = service.classify(builder.atoms)
    assert len(assembly.atoms) == len(builder.atoms)
    assert len(assembly.polymers) == 1
    assert len(assembly.water) == 1
    assert len(assembly.ions) == 1


def test_every_atom_classified_exactly_once(polyglycine):
    builder, _ = polyglycine
    _methane(builder)
    _water(builder)
    assembly = ClassificationService().classify(builder.atoms)
    seen = [atom.index for atom in assembly.atoms]
    assert sorted(seen) == [atom.index for atom in builder.atoms]


@pytest.mark.parametrize(
    "number, name", [(0, "A"), (1, "B"), (25, "Z"), (26, "A1"), (27, "B1"), (52, "A2")]
)
def test_polymer_names(number, name):
    assert polymer_name(number) == name
