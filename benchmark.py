import numpy as np
from byte_suffix_tree import SuffixTree
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt

def generate_random_payloads(n: int, length: int, alphabet: bytes = b"01") -> List[bytes]:
    """Generate n random payloads of given length, each ending in a unique terminator"""
    symbols = np.frombuffer(alphabet, dtype=np.uint8)
    return [np.random.choice(symbols, length).tobytes() + b"$" for _ in range(n)]

def run_benchmark(n_payloads: int, length: int, alphabet: bytes) -> Tuple[float, float, float]:
    """Run benchmark and return build time per payload for both child tables, and nodes per byte"""
    payloads = generate_random_payloads(n_payloads, length, alphabet)

    start_time = time.perf_counter()
    for payload in payloads:
        tree = SuffixTree(payload, child_table='dense')
    dense_time = (time.perf_counter() - start_time) / n_payloads

    start_time = time.perf_counter()
    for payload in payloads:
        tree = SuffixTree(payload, child_table='sparse')
    sparse_time = (time.perf_counter() - start_time) / n_payloads

    return dense_time, sparse_time, tree.node_count / (length + 1)

def main():
    # Test parameters
    lengths = [1_000, 4_000, 16_000, 64_000]
    alphabets = {'binary': b"01", 'dna': b"ACGT", 'lowercase': bytes(range(ord('a'), ord('z') + 1))}
    n_payloads = 3

    # Results storage
    results = []

    try:
        for alphabet_name, alphabet in alphabets.items():
            for length in lengths:
                print(f"Testing: {n_payloads} payloads of length {length} over the {alphabet_name} alphabet")
                dense_time, sparse_time, nodes_per_byte = run_benchmark(n_payloads, length, alphabet)
                results.append({
                    'alphabet': alphabet_name,
                    'length': length,
                    'dense_time': dense_time,
                    'sparse_time': sparse_time,
                    'dense_bytes_per_second': length / dense_time,
                    'sparse_bytes_per_second': length / sparse_time,
                    'inner_nodes_per_byte': nodes_per_byte,
                })

        # Convert to DataFrame and save results
        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        # Print summary statistics
        print("\nBenchmark Summary:")
        print("=================")
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            # Linear construction keeps throughput roughly flat as length grows
            print(f"\nAlphabet: {alphabet_name}")
            print(f"Dense throughput: {data['dense_bytes_per_second'].min():.0f} - {data['dense_bytes_per_second'].max():.0f} bytes/second")
            print(f"Sparse throughput: {data['sparse_bytes_per_second'].min():.0f} - {data['sparse_bytes_per_second'].max():.0f} bytes/second")
            print(f"Inner nodes per byte: {data['inner_nodes_per_byte'].mean():.3f}")

        # Create visualization
        plt.figure(figsize=(12, 6))

        # Plot build time vs length
        plt.subplot(1, 2, 1)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['length'], data['dense_time'], marker='o', label=f'{alphabet_name} (dense)')
            plt.plot(data['length'], data['sparse_time'], marker='x', linestyle='--', label=f'{alphabet_name} (sparse)')

        plt.xlabel('Payload Length (bytes)')
        plt.ylabel('Build Time (s)')
        plt.title('Build Time vs Payload Length')
        plt.grid(True, alpha=0.3)
        plt.legend()

        # Plot throughput
        plt.subplot(1, 2, 2)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['length'], data['dense_bytes_per_second'], marker='o', label=f'{alphabet_name} (dense)')
            plt.plot(data['length'], data['sparse_bytes_per_second'], marker='x', linestyle='--', label=f'{alphabet_name} (sparse)')

        plt.xlabel('Payload Length (bytes)')
        plt.ylabel('Bytes per Second')
        plt.title('Throughput vs Payload Length')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
