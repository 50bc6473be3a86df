from typing import List, Tuple, Set
from dataclasses import dataclass
from garage_crm.core.normalizer import normalize_fio
from garage_crm.core.records import Client, FioDuplicateGroup
from garage_crm.core.similarity import edit_distance

@dataclass
class FioMatch:
    client1: Client
    client2: Client
    distance: int

class FioMatcher:
    """Fuzzy client name matching with single-link grouping.

    Two clients match when their normalized names differ by 1..max_distance
    edits. Identical names are left alone. Groups grow transitively, so a
    group can hold clients whose own names are further apart than
    max_distance (A~B, B~C puts A and C together).
    """

    def __init__(self, max_distance: int = 3):
        self.max_distance = max_distance

    def find_matches(self, clients: List[Client]) -> List[FioMatch]:
        matches = []
        processed: Set[Tuple[str, str]] = set()
        names = [normalize_fio(client.fio) for client in clients]

        for i, client1 in enumerate(clients):
            for j in range(i + 1, len(clients)):
                client2 = clients[j]
                if client1.id == client2.id or names[i] == names[j]:
                    continue

                pair_key = tuple(sorted((client1.id, client2.id)))
                if pair_key in processed:
                    continue

                distance = edit_distance(names[i], names[j])
                if 0 < distance <= self.max_distance:
                    processed.add(pair_key)
                    matches.append(FioMatch(client1, client2, distance))

        return matches

    def group(self, clients: List[Client]) -> List[FioDuplicateGroup]:
        groups: List[Tuple[str, List[Client]]] = []

        for match in self.find_matches(clients):
            for _, members in groups:
                member_ids = {c.id for c in members}
                if match.client1.id in member_ids or match.client2.id in member_ids:
                    for client in (match.client1, match.client2):
                        if client.id not in member_ids:
                            members.append(client)
                            member_ids.add(client.id)
                    break
            else:
                groups.append((normalize_fio(match.client1.fio), [match.client1, match.client2]))

        return [FioDuplicateGroup(normalized_fio=name, clients=tuple(members)) for name, members in groups]
