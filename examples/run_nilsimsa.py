from nilsimsa_lsh import Nilsimsa, compare

if __name__ == "__main__":
    texts = [
        "Dear Bill, Please be ready to receive the money.",
        "Dear Bill, please be ready to receive the money!",
        "Dear Mark, I hope you are okay.",
    ]
    digests = []
    for t in texts:
        h = Nilsimsa()
        for word in t.split(" "):
            h.update(word + " ")
        digests.append(h.hexdigest())
        print(digests[-1], repr(t))

    print("\nSCORES:")
    for i in range(len(texts)):
        for j in range(i + 1, len(texts)):
            print(f"  {i} vs {j}: {compare(digests[i], digests[j])}")
