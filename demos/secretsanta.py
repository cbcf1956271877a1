"""Demo solution to the Secret Santa problem.

The Secret Santa problem is about generating secret random permutations
without fixed points. A fixed point of a permutation p is a point i for
which p(i)=i, hence the point is mapped to itself. Permutations without
fixed points are also called 'derangements'.

This demo runs the protocol for n=2,...,N participants and prints the
resulting derangements along with the number of attempts needed.
Since all participants are simulated in one process, the demo is able
to reveal the entire derangement.
"""

import sys
from secsanta.elgamal import generate_group
from secsanta.protocol import SecretSanta


def xprint(N, group):
    print(f'Using group: {group.__name__[:32]}...')
    for n in range(2, N+1):
        santa = SecretSanta(n, group=group)
        santa.assign()
        print(n, santa.reveal().as_permutation(), f'({santa.attempts} attempts)')


def main():
    if sys.argv[1:]:
        N = int(sys.argv[1])
    else:
        N = 8
        print('Setting input to default =', N)

    xprint(N, generate_group(l=64))
    xprint(N, generate_group())


if __name__ == '__main__':
    main()
