"""Secret Santa protocol: repeated attempts until the participants are deranged.

One attempt runs all steps of the protocol from scratch:

    1. every participant generates a fresh key pair (possibly in parallel)
    2. every participant contributes her initial token (g, h)
    3. every participant in turn performs a shuffle round (strictly sequential)
    4. every participant extracts her recipient from the final list of tokens

If some participant is assigned to herself, the attempt is discarded as a whole,
including the keys and recipients of all participants, and a new attempt is started.
Only restarting the entire attempt keeps the resulting derangement uniformly random
and prevents information from a failed attempt leaking into the next one.

The number of attempts is unbounded. An attempt succeeds with probability D(n)/n!,
where D(n) is the number of derangements of n elements, hence the expected number
of attempts n!/D(n) tends to e = 2.718... as n grows (2 for n=2, 3 for n=3).
"""

import os
import logging
import concurrent.futures
from secsanta.elgamal import generate_group
from secsanta.participant import Participant
from secsanta import mixnet

RUNNING = 'Running'
DONE = 'Done'


class SelfAssignmentDetected(Exception):
    """Some participant got herself as recipient."""

    def __init__(self, pid):
        super().__init__(f'participant {pid} assigned to herself')
        self.pid = pid


class Derangement:
    """Permutation of 1..n without fixed points, given as read-only mapping pid -> recipient."""

    __slots__ = '_recipients'

    def __init__(self, recipients):
        recipients = dict(recipients)
        n = len(recipients)
        pids = set(range(1, n+1))
        if set(recipients) != pids or set(recipients.values()) != pids:
            raise ValueError(f'permutation of 1..{n} required')

        for i, j in recipients.items():
            if i == j:
                raise ValueError(f'fixed point {i} not allowed')

        self._recipients = {i: recipients[i] for i in range(1, n+1)}

    def __getitem__(self, pid):
        return self._recipients[pid]

    def __len__(self):
        return len(self._recipients)

    def __iter__(self):
        return iter(self._recipients)

    def items(self):
        return self._recipients.items()

    def as_permutation(self):
        """Return tuple of recipients of participants 1..n."""
        return tuple(self._recipients.values())

    def __eq__(self, other):
        if not isinstance(other, Derangement):
            return NotImplemented

        return self._recipients == other._recipients

    def __hash__(self):
        return hash(self.as_permutation())

    def __repr__(self):
        return f'Derangement({self._recipients})'


def _check_participants(n):
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError('number of participants must be an int')

    if n < 2:
        raise ValueError(f'at least 2 participants required, got {n}')


def _generate_keys(participants, group, rng, workers):
    if workers:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            tasks = [executor.submit(p.generate_key, group, rng) for p in participants]
        for task in tasks:
            task.result()  # reraises exception from key generation, if any
    else:
        for p in participants:
            p.generate_key(group, rng)

    # public keys must be distinct for extraction to find unique matches
    while True:
        seen = set()
        duplicates = []
        for p in participants:
            if p.public_key in seen:
                duplicates.append(p)
            seen.add(p.public_key)
        if not duplicates:
            break

        logging.debug(f'Regenerate {len(duplicates)} colliding key(s)')
        for p in duplicates:
            p.forget()
            p.generate_key(group, rng)


def run_one_attempt(n, l=None, group=None, rng=None, workers=0,
                    shuffle_round=mixnet.shuffle_round):
    """Run one attempt of the protocol for n participants.

    Return the derangement together with the list of participants, each of whom
    holds her own recipient. Raise SelfAssignmentDetected if the attempt failed,
    in which case all key material of all participants has been wiped.

    A fresh group is generated for bit length l, unless group is given.
    Key generation uses up to workers threads, if workers>0.
    """
    _check_participants(n)
    if group is None:
        group = generate_group(l)
    if group.order - 1 < n:
        raise ValueError(f'group of order {group.order} too small for {n} participants')

    participants = [Participant(i) for i in range(1, n+1)]
    try:
        _generate_keys(participants, group, rng, workers)
        tokens = mixnet.initial_tokens(participants)
        tokens = mixnet.mix(tokens, participants, rng, shuffle_round)
        # broadcast tokens to all participants
        for p in participants:
            if p.extract(tokens) == p.pid:
                raise SelfAssignmentDetected(p.pid)
    except Exception:
        for p in participants:
            p.forget()
        raise

    return Derangement((p.pid, p.recipient) for p in participants), participants


class SecretSanta:
    """Secret Santa among n participants.

    The protocol is in state RUNNING until assign() has found a derangement,
    and then in state DONE. In state DONE, gives_to(i) tells participant i her
    recipient; reveal() exposes the entire derangement and participants exposes all
    participants with their key material, both for testing purposes only.
    """

    def __init__(self, n, l=None, group=None, rng=None, workers=None,
                 shuffle_round=mixnet.shuffle_round):
        _check_participants(n)
        if workers is None:
            workers = int(os.getenv('SECSANTA_MAXWORKERS', '0'))
        self.n = n
        self.l = l
        self.group = group
        self.rng = rng
        self.workers = workers
        self.shuffle_round = shuffle_round
        self.state = RUNNING
        self.attempts = 0
        self._participants = None
        self._derangement = None

    def __repr__(self):
        return f'<SecretSanta n={self.n}: {self.state}>'

    def assign(self):
        """Run attempts until the participants are deranged."""
        logging.info(f'New secret santa among {self.n} players')
        while self.state == RUNNING:
            self.attempts += 1
            try:
                derangement, participants = run_one_attempt(self.n, self.l, self.group, self.rng,
                                                            self.workers, self.shuffle_round)
            except SelfAssignmentDetected as exc:
                logging.info(f'Attempt {self.attempts} discarded: {exc}')
                continue

            self._participants = participants
            self._derangement = derangement
            self.state = DONE
        logging.info(f'Secret santa done after {self.attempts} attempt(s)')

    def _require_done(self):
        if self.state != DONE:
            raise RuntimeError('no assignment yet, call assign() first')

    @property
    def participants(self):
        """Return all participants, including their key material, for testing purposes only."""
        self._require_done()
        return tuple(self._participants)

    def gives_to(self, pid):
        """Return recipient of participant pid, as known to participant pid only."""
        self._require_done()
        if not 1 <= pid <= self.n:
            raise ValueError(f'participant 1..{self.n} required')

        return self._participants[pid-1].recipient

    def reveal(self):
        """Return entire derangement, for testing purposes only."""
        self._require_done()
        return self._derangement


def assign(n, l=None, group=None, rng=None, workers=None):
    """Run Secret Santa among n participants and return the derangement."""
    santa = SecretSanta(n, l=l, group=group, rng=rng, workers=workers)
    santa.assign()
    return santa.reveal()
