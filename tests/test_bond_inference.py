import pytest

from molhierarchy.config import InferenceSettings
from molhierarchy.core.domain.elements import ION_RADIUS, bonding_radius
from molhierarchy.core.domain.implementations.neighbor_search_bond_inferrer import (
    NeighborSearchBondInferrer,
)
from molhierarchy.core.domain.implementations.pairwise_bond_inferrer import (
    PairwiseBondInferrer,
)
from molhierarchy.core.domain.models.atom import Atom, AtomRecord
from molhierarchy.core.domain.models.bond import Bond
from molhierarchy.core.domain.models.molecular_graph import MolecularGraph
from molhierarchy.exceptions import InvariantViolation

INFERRERS = [PairwiseBondInferrer, NeighborSearchBondInferrer]


def _pair(separation):
    return [
        Atom(0, "C", (0.0, 0.0, 0.0), radius=1.0),
        Atom(1, "C", (separation, 0.0, 0.0), radius=1.0),
    ]


@pytest.mark.parametrize("inferrer_class", INFERRERS)
def test_no_bond_at_exact_cutoff(inferrer_class):
    boundary = 0.7 + 1.0 / 2 + 1.0 / 2
    atoms = _pair(boundary)
    assert inferrer_class().infer(atoms) == []
    assert atoms[0].bonds == []


@pytest.mark.parametrize("inferrer_class", INFERRERS)
def test_bond_just_inside_cutoff(inferrer_class):
    boundary = 0.7 + 1.0 / 2 + 1.0 / 2
    atoms = _pair(boundary - 1e-6)
    bonds = inferrer_class().infer(atoms)
    assert len(bonds) == 1
    assert atoms[0].is_bonded_to(atoms[1])
    assert atoms[1].is_bonded_to(atoms[0])


def _water_and_ion():
    return [
        Atom(0, "O", (0.0, 0.0, 0.0)),
        Atom(1, "H", (0.957, 0.0, 0.0)),
        Atom(2, "H", (-0.240, 0.927, 0.0)),
        Atom(3, "Na", (2.2, 0.0, 0.0)),
    ]


def test_inferrers_agree():
    first, second = _water_and_ion(), _water_and_ion()
    assert PairwiseBondInferrer().find_pairs(first) == NeighborSearchBondInferrer().find_pairs(second)
    assert PairwiseBondInferrer().find_pairs(first) == [(0, 1), (0, 2)]


def test_inference_is_idempotent():
    atoms = _water_and_ion()
    inferrer = PairwiseBondInferrer()
    assert len(inferrer.infer(atoms)) == 2
    assert inferrer.infer(atoms) == []
    assert atoms[0].num_bonds == 2


def test_bonds_are_symmetric():
    atoms = _water_and_ion()
    PairwiseBondInferrer().infer(atoms)
    for atom in atoms:
        for neighbor in atom.neighbors():
            assert atom in list(neighbor.neighbors())


def test_buffer_widens_cutoff():
    atoms = _pair(1.8)
    assert PairwiseBondInferrer().infer(atoms) == []
    assert len(PairwiseBondInferrer(buffer=0.9).infer(atoms)) == 1


def test_settings_select_inferrer():
    inferrer = InferenceSettings(inferrer="neighbor-search", bond_buffer=0.5).make_inferrer()
    assert isinstance(inferrer, NeighborSearchBondInferrer)
    assert inferrer.buffer == 0.5
    assert isinstance(InferenceSettings().make_inferrer(), PairwiseBondInferrer)


def test_metals_and_unknown_elements_use_ion_radius():
    assert bonding_radius(26) == ION_RADIUS
    assert Atom(0, "Xx", (0, 0, 0)).radius == ION_RADIUS
    assert Atom(0, "C", (0, 0, 0)).radius == pytest.approx(2 * 0.76 - 0.25)


def test_duplicate_and_self_bonds_rejected():
    first, second = _pair(1.0)
    Bond(first, second)
    with pytest.raises(InvariantViolation):
        Bond(second, first)
    with pytest.raises(InvariantViolation):
        Bond(first, first)


def test_graph_from_records_infers_bonds():
    records = [
        AtomRecord(0, "O", (0.0, 0.0, 0.0)),
        AtomRecord(1, "H", (0.957, 0.0, 0.0)),
        AtomRecord(2, "H", (-0.240, 0.927, 0.0)),
    ]
    graph = MolecularGraph.from_records(records)
    assert len(graph.bonds) == 2
    assert graph.get_coordinates().shape == (3, 3)


def test_graph_from_records_uses_explicit_bonds():
    records = [
        AtomRecord(0, "C", (0.0, 0.0, 0.0)),
        AtomRecord(1, "C", (5.0, 0.0, 0.0)),
        AtomRecord(2, "C", (0.5, 0.0, 0.0)),
    ]
    graph = MolecularGraph.from_records(records, bonds=[(0, 1)])
    assert [(b.atom1.index, b.atom2.index) for b in graph.bonds] == [(0, 1)]
    assert graph.atoms[2].bonds == []

    with pytest.raises(ValueError):
        MolecularGraph.from_records(records, bonds=[(0, 7)])


def test_unknown_element_is_logged(caplog):
    MolecularGraph.from_records([AtomRecord(0, "Qq", (0.0, 0.0, 0.0))])
    assert "unknown element" in caplog.text


def test_fragments_in_input_order():
    atoms = _water_and_ion()
    PairwiseBondInferrer().infer(atoms)
    fragments = MolecularGraph(atoms).fragments()
    assert [[atom.index for atom in fragment] for fragment in fragments] == [[0, 1, 2], [3]]
