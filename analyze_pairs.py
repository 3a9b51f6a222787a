#!/usr/bin/env python3
"""
analyze_pairs.py - Statistics of the Goldbach decompositions in pairs.csv
=========================================================================

Requires: numpy, pandas, matplotlib, scipy, sympy
Run as: python analyze_pairs.py (pairs.csv written by Goldbach_Sieve.py)


BACKGROUND
==========

For an even number n let g(n) be the number of ways to write n = p + q with
p <= q both prime. Plotted against n, g(n) forms the "Goldbach comet": a band
that widens as n grows, with g(n) never observed to reach 0 for n >= 4.

Hardy and Littlewood's conjecture A predicts the growth:

    g(n) ~ C(n) * n / log(n)^2

where C(n) depends on the odd prime factors of n (even numbers divisible by 3
sit on a visibly higher band of the comet). Rather than model C(n) exactly, we
fit the simplest form

    g(n) ~ c * n / log(n)^2 + d

and report how far the data scatter around it.

WHAT THE ANALYSIS PRODUCES
==========================

1. PARTITION COUNTS g(n) for every even n present in the pairs file
2. FITTED MODEL with R² and residual sigma
3. MINIMAL COUNTS: for each small k, the last even number with g(n) = k
   (these become rare quickly, which is the empirical face of the conjecture)
4. VALIDATION that every row is a genuine decomposition (checked with SYMPY)
5. A comet plot with the fitted curve, a JSON model file and a CSV of counts

REFERENCES
==========

Hardy, G. H. & Littlewood, J. E. (1923). "Some problems of 'Partitio
numerorum'; III: On the expression of a number as a sum of primes".
Acta Mathematica, 44, 1-70.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from scipy.optimize import curve_fit
from sympy import isprime
import json
import argparse


class PairsAnalyzer:
    """
    Analyzes the decompositions stored in a pairs file.

    The analysis follows these steps:
    1. Load the pairs and count decompositions per even number
    2. Compute derived quantities (log n, Hardy-Littlewood scale)
    3. Fit the growth model
    4. Find the even numbers with the fewest decompositions
    5. Validate the stored rows
    6. Generate the comet plot and export results
    """

    def __init__(self, data_file, verbose=True):
        """Initialize analyzer with the pairs file."""
        self.verbose = verbose
        self.pairs = self._load_pairs(data_file)
        self.df = self._count_partitions()
        self._compute_derived_quantities()
        self.model = {}
        self.minimal_counts = {}

    def _load_pairs(self, data_file):
        """Load even,p,q rows, dropping anything malformed."""
        if self.verbose:
            print(f"Loading pairs from {data_file}...")

        try:
            pairs = pd.read_csv(data_file, header=None, names=['even', 'p', 'q'],
                                dtype=str, on_bad_lines='skip')
        except pd.errors.EmptyDataError:
            pairs = pd.DataFrame(columns=['even', 'p', 'q'])
        pairs = pairs.apply(pd.to_numeric, errors='coerce').dropna().astype(np.int64)

        if self.verbose:
            print(f"Loaded {len(pairs):,} pairs")
        return pairs

    def _count_partitions(self):
        df = self.pairs.groupby('even').size().rename('count').reset_index()
        df = df.sort_values('even', ignore_index=True)

        if self.verbose and len(df):
            print(f"  Even numbers: {df['even'].min():,} to {df['even'].max():,} ({len(df):,} values)")
            print(f"  Partition counts: {df['count'].min()} to {df['count'].max()}")
        return df

    def _compute_derived_quantities(self):
        """
        log(n) and the Hardy-Littlewood scale n / log(n)^2.

        Even numbers divisible by 3 are flagged, since they form the upper band
        of the comet.
        """
        self.df['log_n'] = np.log(self.df['even'].astype(float))
        self.df['hl_scale'] = self.df['even'] / self.df['log_n'] ** 2
        self.df['div3'] = self.df['even'] % 3 == 0

    def fit_growth_model(self):
        """
        Fit g(n) ~ c * n / log(n)^2 + d by least squares.

        Returns the model dictionary with parameters and goodness of fit.
        """
        if len(self.df) < 3:
            raise ValueError("Need at least 3 even numbers to fit the growth model")

        if self.verbose:
            print("\nFitting growth model...")

        def hl_model(hl_scale, c, d):
            return c * hl_scale + d

        x = self.df['hl_scale'].values
        y = self.df['count'].values.astype(float)

        params, cov = curve_fit(hl_model, x, y)
        residuals = y - hl_model(x, *params)
        sigma = np.std(residuals)
        ss_tot = np.sum((y - np.mean(y)) ** 2)
        r2 = 1 - np.sum(residuals ** 2) / ss_tot if ss_tot > 0 else 1.0

        self.model = {
            'function': hl_model,
            'params': params,
            'covariance': cov,
            'sigma': sigma,
            'r_squared': r2,
            'description': f'g(n) ≈ {params[0]:.4f}·n/log(n)² + {params[1]:.4f}'
        }
        self.df['count_predicted'] = hl_model(self.df['hl_scale'], *params)

        if self.verbose:
            print(f"  {self.model['description']}")
            print(f"  R² = {r2:.6f}")
            print(f"  σ = {sigma:.4f}")
            print(f"  (Hardy-Littlewood predicts c between 0.66 and about 2 depending on n)")
        return self.model

    def find_minimal_counts(self, max_count=10):
        """
        For each k in 1..max_count, the last even number n with g(n) = k and how
        many even numbers have that count.
        """
        minimal = {}
        for k in range(1, max_count + 1):
            rows = self.df[self.df['count'] == k]
            if len(rows) == 0:
                continue
            minimal[k] = {
                'last_even': int(rows['even'].max()),
                'occurrences': int(len(rows))
            }
        self.minimal_counts = minimal

        if self.verbose:
            print("\nSmall partition counts:")
            print(f"{'g(n)':<8} {'Last n':<15} {'Occurrences':<12}")
            print("-" * 36)
            for k, m in minimal.items():
                print(f"{k:<8} {m['last_even']:<15,} {m['occurrences']:<12,}")
        return minimal

    def validate(self):
        """
        Check every stored row: p + q == even, p <= q, both prime, even >= 4.

        Returns the DataFrame of violating rows (empty when all rows are valid).
        """
        if self.verbose:
            print("\nValidating stored pairs...")

        pairs = self.pairs
        structural = (
            (pairs['p'] + pairs['q'] != pairs['even'])
            | (pairs['p'] > pairs['q'])
            | (pairs['even'] < 4)
            | (pairs['even'] % 2 != 0)
        )
        values = pd.unique(pd.concat([pairs['p'], pairs['q']]))
        prime_lookup = {int(v): isprime(int(v)) for v in values}
        not_prime = ~(pairs['p'].map(prime_lookup).astype(bool) & pairs['q'].map(prime_lookup).astype(bool))

        violations = pairs[structural | not_prime]
        if self.verbose:
            if len(violations):
                print(f"⚠ Found {len(violations):,} invalid rows, first at even {violations['even'].iloc[0]:,}")
            else:
                print("  All rows are valid decompositions")
        return violations

    def plot_comet(self, output_file='goldbach_comet.png'):
        """Scatter g(n) against n with the fitted curve."""
        fig, ax = plt.subplots(figsize=(14, 8))

        div3 = self.df[self.df['div3']]
        other = self.df[~self.df['div3']]
        ax.plot(other['even'], other['count'], 'b.', alpha=0.4, markersize=2, label='n not divisible by 3')
        ax.plot(div3['even'], div3['count'], 'g.', alpha=0.4, markersize=2, label='n divisible by 3')
        if 'count_predicted' in self.df:
            ax.plot(self.df['even'], self.df['count_predicted'], 'r-', linewidth=2,
                    label=self.model['description'])

        ax.set_xlabel('Even number n', fontsize=12, fontweight='bold')
        ax.set_ylabel('g(n)', fontsize=12, fontweight='bold')
        ax.set_title('Goldbach Comet', fontsize=13, fontweight='bold')
        ax.legend(loc='upper left')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(output_file, dpi=300, bbox_inches='tight')
        plt.close(fig)

        if self.verbose:
            print(f"\nSaved comet plot to {output_file}")
        return output_file

    def export_results(self, output_prefix='goldbach_analysis'):
        """Export the model, the small counts and the per-even counts."""
        summary = {'minimal_counts': {str(k): v for k, v in self.minimal_counts.items()}}
        if self.model:
            summary['model'] = {
                'equation': self.model['description'],
                'parameters': {
                    'c': float(self.model['params'][0]),
                    'd': float(self.model['params'][1])
                },
                'r_squared': float(self.model['r_squared']),
                'sigma': float(self.model['sigma'])
            }

        summary_file = f'{output_prefix}_summary.json'
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)

        counts_file = f'{output_prefix}_counts.csv'
        self.df.to_csv(counts_file, index=False)

        if self.verbose:
            print(f"\nExported summary to {summary_file}")
            print(f"Exported partition counts to {counts_file}")
        return summary_file, counts_file


def main(argv=None):
    """Analysis pipeline for a pairs file."""
    parser = argparse.ArgumentParser(
        description='Count and fit the Goldbach decompositions stored by Goldbach_Sieve.py'
    )
    parser.add_argument('input_file', help='pairs.csv written by Goldbach_Sieve.py')
    parser.add_argument('--max-count', type=int, default=10, help='Largest g(n) listed in the small counts (default: 10)')
    parser.add_argument('--output-prefix', default='goldbach_analysis', help='Prefix for output files')
    parser.add_argument('--no-plots', action='store_true', help='Skip generating plots')
    parser.add_argument('--quiet', action='store_true', help='Suppress verbose output')

    args = parser.parse_args(argv)

    analyzer = PairsAnalyzer(args.input_file, verbose=not args.quiet)

    if len(analyzer.df) >= 3:
        analyzer.fit_growth_model()
    elif not args.quiet:
        print(f"\nSkipping growth model: only {len(analyzer.df)} even number(s) in the file")
    analyzer.find_minimal_counts(max_count=args.max_count)
    analyzer.validate()

    if not args.no_plots:
        analyzer.plot_comet(f'{args.output_prefix}_comet.png')

    analyzer.export_results(args.output_prefix)

    print("\n" + "="*70)
    print("ANALYSIS COMPLETE")
    print("="*70)


if __name__ == '__main__':
    main()
